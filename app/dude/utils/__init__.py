"""Utility modules for dude.

This module exports commonly used utility functions.
"""

from dude.utils.formatting import (
    console,
    create_orphan_table,
    err_console,
    print_error,
    print_info,
    print_orphans,
    print_success,
    print_warning,
)
from dude.utils.shell import CommandResult, command_exists, is_root, run_command, run_interactive

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_orphan_table",
    "err_console",
    "is_root",
    "print_error",
    "print_info",
    "print_orphans",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
]
