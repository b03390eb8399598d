"""Frontend dependency pin reconciliation."""
