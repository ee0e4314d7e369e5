"""CLI package for dotlink.

This package contains the Typer application and all commands.
"""

from dotlink.cli.main import app

__all__ = ["app"]
