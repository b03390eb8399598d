"""Shared runtime helpers: context, config, logging, effects, schemas."""
