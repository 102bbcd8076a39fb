"""Shared helpers for CLI commands.

Every command runs the same pipeline: load configuration, classify the
installed packages, apply the --keep pattern and then the whitelist.
Removal is reported the same way everywhere.
"""

import logging
import sys

import typer
from rich.logging import RichHandler

from dude.core.config import DudeConfig, load_config
from dude.core.errors import PatternError, RemovalError, SourceReadError
from dude.core.executor import RemovalExecutor, send_notification
from dude.core.filters import exclude_matching, exclude_whitelisted
from dude.core.orphans import classify
from dude.models.package import PackageRecord
from dude.models.removal import RemovalOutcome
from dude.operators.pacman import PacmanOperator
from dude.scanners.pacman import PacmanScanner
from dude.utils.formatting import (
    NO_ORPHANS_MESSAGE,
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def setup_logging(verbose: bool) -> None:
    """Configure the level of dude's loggers.

    Verbose mode routes everything from DEBUG up to stderr through Rich.
    Otherwise only warnings get through, via logging's default handler.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logger = logging.getLogger("dude")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    if verbose:
        handler = RichHandler(console=err_console, show_time=False, show_path=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def is_interactive() -> bool:
    """Check if stdout is attached to a terminal."""
    return sys.stdout.isatty()


def get_options(ctx: typer.Context) -> dict[str, object]:
    """Return the global options stored by the main callback."""
    ctx.ensure_object(dict)
    return ctx.obj


def load_orphans(ctx: typer.Context) -> tuple[DudeConfig, list[PackageRecord]]:
    """Load configuration and compute the filtered orphan list.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Tuple of (effective config, filtered orphans).

    Raises:
        typer.Exit: With code 1 if the package database cannot be read
            or the --keep pattern is invalid.
    """
    options = get_options(ctx)
    config = load_config()

    scanner = PacmanScanner()
    try:
        orphans = classify(scanner.scan())
    except SourceReadError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    keep = options.get("keep")
    if keep is not None:
        try:
            orphans = exclude_matching(orphans, str(keep))
        except PatternError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    return config, exclude_whitelisted(orphans, config.whitelist)


def report_no_orphans(ctx: typer.Context) -> None:
    """Print the no-orphans message unless running as a hook."""
    if not get_options(ctx).get("hook"):
        print_info(NO_ORPHANS_MESSAGE)


def remove_packages(
    ctx: typer.Context,
    config: DudeConfig,
    packages: list[PackageRecord],
) -> RemovalOutcome:
    """Remove packages in one transaction and report the result.

    Args:
        ctx: Typer context carrying the global options.
        config: Effective configuration (for notifications).
        packages: Packages to remove.

    Returns:
        The removal outcome.

    Raises:
        typer.Exit: With code 1 if the removal fails.
    """
    nosave = bool(get_options(ctx).get("nosave"))
    operator = PacmanOperator()

    if packages:
        command = operator.command_for([p.name for p in packages], nosave=nosave)
        console.print(f"[muted]Executing:[/] {' '.join(command)}", highlight=False)

    try:
        outcome = RemovalExecutor(operator).remove(packages, nosave=nosave)
    except RemovalError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if outcome.is_noop:
        return outcome

    print_success(f"\n✓ Successfully removed {outcome.removed_count} packages")
    if config.notify and not send_notification(outcome.removed_count):
        print_warning("Could not send desktop notification.")
    return outcome
