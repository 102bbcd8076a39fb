"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from dude.core.theme import get_theme, repo_style
from dude.models.package import format_mib

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dude.models.package import PackageRecord

NO_ORPHANS_MESSAGE = "No orphan packages found."


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def styled_name(pkg: PackageRecord) -> str:
    """Return the package name wrapped in its repository style."""
    style = repo_style(pkg.repository)
    return f"[{style}]{pkg.name}[/]"


def total_size(packages: Sequence[PackageRecord]) -> int:
    """Sum the installed size of a package list in bytes."""
    return sum(p.size_bytes for p in packages)


def create_orphan_table(packages: Sequence[PackageRecord]) -> Table:
    """Create a table listing orphan packages.

    Args:
        packages: Orphans in display order.

    Returns:
        Rich Table with one row per package.
    """
    table = Table(
        show_header=True,
        header_style="bold_header",
        border_style="border",
        box=None,
        pad_edge=False,
    )
    table.add_column("Package", no_wrap=True)
    table.add_column("Version", style="package.version")
    table.add_column("Size", style="package.size", justify="right")
    table.add_column("Repo", style="muted")
    table.add_column("Installed", style="muted")

    for pkg in packages:
        table.add_row(
            styled_name(pkg),
            pkg.version,
            pkg.size_human,
            pkg.repo,
            pkg.install_time.strftime("%Y-%m-%d"),
        )
    return table


def print_orphans(packages: Sequence[PackageRecord]) -> None:
    """Print the orphan summary line and table.

    Args:
        packages: Orphans to show. An empty list prints the no-orphans message.
    """
    if not packages:
        print_info(NO_ORPHANS_MESSAGE)
        return

    console.print(
        f"Found [bold]{len(packages)}[/bold] orphan packages "
        f"([package.size]{format_mib(total_size(packages))}[/] total):\n"
    )
    console.print(create_orphan_table(packages))
    console.print()


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
