"""Prune command implementation.

Removes every filtered orphan in one transaction, after confirmation
unless --yes is given.
"""

from typing import Annotated

import typer

from dude.cli.common import (
    is_interactive,
    load_orphans,
    remove_packages,
    report_no_orphans,
)
from dude.models.package import format_mib
from dude.utils.formatting import console, print_info, print_orphans, total_size

app = typer.Typer(
    help="Remove all orphan packages.",
    invoke_without_command=True,
)

DRY_RUN_MESSAGE = "Dry run - no packages removed."


def _confirm_removal(count: int, size_bytes: int) -> bool:
    """Prompt user to confirm the removal.

    Args:
        count: Number of packages to be removed.
        size_bytes: Space freed in bytes.

    Returns:
        True if user confirms, False otherwise.
    """
    console.print(
        f"About to remove [bold]{count}[/bold] packages, "
        f"freeing [package.size]{format_mib(size_bytes)}[/]"
    )
    return typer.confirm("Continue?", default=False)


@app.callback(invoke_without_command=True)
def prune(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and remove.",
        ),
    ] = False,
    dry: Annotated[
        bool,
        typer.Option(
            "--dry",
            "-n",
            help="Only show what would be removed.",
        ),
    ] = False,
) -> None:
    """Remove all orphan packages.

    Without --yes on a non-interactive stdout nothing is removed and the
    command behaves like --dry.

    Examples:
        dude prune              # List, confirm, remove
        dude prune --dry        # Show what would be removed
        dude --nosave prune -y  # Remove with configs, no prompt
    """
    if ctx.invoked_subcommand is not None:
        return

    config, orphans = load_orphans(ctx)
    if not orphans:
        report_no_orphans(ctx)
        return

    if dry or (not yes and not is_interactive()):
        print_orphans(orphans)
        print_info(DRY_RUN_MESSAGE)
        return

    if not yes:
        print_orphans(orphans)
        if not _confirm_removal(len(orphans), total_size(orphans)):
            print_info("Aborted.")
            return

    remove_packages(ctx, config, orphans)
