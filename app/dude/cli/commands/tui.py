"""Interactive selection command implementation.

Opens a full-screen list of orphans, lets the user pick which to remove
and removes the confirmed subset. This is also what runs when dude is
invoked without a command.
"""

import sys

import typer

from dude.cli.common import load_orphans, remove_packages, report_no_orphans
from dude.cli.terminal import run_selection
from dude.utils.formatting import print_error, print_info

app = typer.Typer(
    help="Interactively select orphan packages to remove.",
    invoke_without_command=True,
)


def _has_terminal() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def run_interactive_removal(ctx: typer.Context) -> None:
    """Run the interactive selection flow.

    Args:
        ctx: Typer context carrying the global options.

    Raises:
        typer.Exit: With code 1 without a terminal or on removal failure.
    """
    config, orphans = load_orphans(ctx)
    if not orphans:
        report_no_orphans(ctx)
        return

    if not _has_terminal():
        print_error("Interactive mode requires a terminal. Use 'dude list' or 'dude prune'.")
        raise typer.Exit(code=1)

    selected = run_selection(orphans)
    if not selected:
        print_info("No packages selected.")
        return

    remove_packages(ctx, config, list(selected))


@app.callback(invoke_without_command=True)
def tui(ctx: typer.Context) -> None:
    """Select orphan packages interactively.

    Keys: ↑/↓ or j/k move, Space toggles, a selects all, n selects none,
    Enter removes the selection, q or Esc quits without changes.
    """
    if ctx.invoked_subcommand is not None:
        return
    run_interactive_removal(ctx)
