"""Auto command implementation.

Removes every filtered orphan without prompting, but only when the
configured auto-prune policy allows it. Intended for pacman hooks and
timers.
"""

import typer

from dude.cli.common import get_options, load_orphans, remove_packages, report_no_orphans
from dude.core.auto_prune import LastRunStore, should_auto_prune
from dude.core.errors import LastRunError
from dude.utils.formatting import print_error, print_info

app = typer.Typer(
    help="Remove orphans if the auto-prune policy allows it.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def auto(ctx: typer.Context) -> None:
    """Auto-prune orphan packages.

    Requires an [auto_prune] table in the configuration. Orphans are only
    removed when they add up to at least threshold_mb MiB and at least
    days_since_last_run whole days have passed since the last successful
    auto-prune.

    Examples:
        dude auto
        dude --hook auto        # Silent unless something is removed
    """
    if ctx.invoked_subcommand is not None:
        return

    config, orphans = load_orphans(ctx)
    if not orphans:
        report_no_orphans(ctx)
        return

    store = LastRunStore()
    if not should_auto_prune(orphans, config.auto_prune, store.read()):
        if not get_options(ctx).get("hook"):
            print_info("Auto-prune conditions not met.")
        return

    print_info(f"Auto-pruning {len(orphans)} orphan packages...")
    remove_packages(ctx, config, orphans)

    try:
        store.record_run_now()
    except LastRunError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
