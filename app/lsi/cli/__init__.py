"""CLI package for lsi.

This package contains the Typer application, its parameter types and
the column renderer.
"""

from lsi.cli.main import app

__all__ = ["app"]
