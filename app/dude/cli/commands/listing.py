"""List command implementation.

Prints the filtered orphan packages without removing anything.
"""

import typer

from dude.cli.common import load_orphans, report_no_orphans
from dude.utils.formatting import print_orphans

app = typer.Typer(
    help="List orphan packages.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_orphans(ctx: typer.Context) -> None:
    """List orphan packages, largest first.

    Examples:
        dude list
        dude --keep '^python-' list
    """
    if ctx.invoked_subcommand is not None:
        return

    _, orphans = load_orphans(ctx)
    if not orphans:
        report_no_orphans(ctx)
        return

    print_orphans(orphans)
