"""CLI package for dude.

This package contains the Typer application and all subcommands.
"""

from dude.cli.main import app

__all__ = ["app"]
