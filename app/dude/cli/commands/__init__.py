"""CLI commands for dude.

This package contains all subcommand implementations.
"""

from dude.cli.commands import auto, config, listing, prune, tui

__all__ = ["auto", "config", "listing", "prune", "tui"]
