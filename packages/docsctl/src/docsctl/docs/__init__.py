"""User guide generation, build and publish pipeline."""
