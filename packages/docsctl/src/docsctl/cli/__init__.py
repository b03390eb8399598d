"""Command line entry points; `python -m docsctl.cli` runs `main`."""

from .main import build_parser, main

__all__ = ["build_parser", "main"]
