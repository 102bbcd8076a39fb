"""Interactive terminal front end for a SelectionSession.

Reads one key at a time with the TTY in cbreak mode, decodes it into a
SessionInput and re-renders the list with Rich inside the alternate
screen. Both terminal modes are scoped: interactive_terminal() restores
them on every exit path, including exceptions raised by the loop.
"""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Group
from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

from dude.core.selection import SelectionSession, SessionInput
from dude.core.theme import repo_style
from dude.models.package import format_mib
from dude.utils.formatting import console as default_console

if TYPE_CHECKING:
    from rich.console import Console, RenderableType, ScreenContext

    from dude.models.package import PackageRecord

# Escape sequences arrive as several bytes; wait this long for the rest
_ESCAPE_TIMEOUT = 0.03

KEY_BINDINGS: dict[str, SessionInput] = {
    "\x1b[A": SessionInput.MOVE_UP,
    "\x1bOA": SessionInput.MOVE_UP,
    "k": SessionInput.MOVE_UP,
    "\x1b[B": SessionInput.MOVE_DOWN,
    "\x1bOB": SessionInput.MOVE_DOWN,
    "j": SessionInput.MOVE_DOWN,
    " ": SessionInput.TOGGLE,
    "a": SessionInput.SELECT_ALL,
    "n": SessionInput.SELECT_NONE,
    "\r": SessionInput.CONFIRM,
    "\n": SessionInput.CONFIRM,
    "q": SessionInput.QUIT,
    "\x1b": SessionInput.QUIT,
    "\x03": SessionInput.QUIT,
}

HELP_TEXT = (
    "↑/↓: Navigate  Space: Toggle  a: Select All  n: Select None  Enter: Remove  q/Esc: Quit"
)

# Rows taken by the summary and help panels plus the list border
_CHROME_ROWS = 8


def decode_key(key: str) -> SessionInput | None:
    """Map a raw key sequence to a session input.

    Args:
        key: Characters read for one key press.

    Returns:
        The bound SessionInput, or None for unbound keys.
    """
    return KEY_BINDINGS.get(key)


def read_key(fd: int) -> str:
    """Read one key press from a terminal in cbreak mode.

    Args:
        fd: File descriptor of the terminal.

    Returns:
        The key's characters; escape sequences are returned whole.

    Raises:
        EOFError: If the terminal was closed.
    """
    data = os.read(fd, 1)
    if not data:
        raise EOFError("terminal closed")
    if data == b"\x1b":
        while len(data) < 3 and select.select([fd], [], [], _ESCAPE_TIMEOUT)[0]:
            data += os.read(fd, 1)
    return data.decode(errors="ignore")


@contextmanager
def interactive_terminal(console: Console, fd: int) -> Iterator[ScreenContext]:
    """Enter cbreak mode and the alternate screen for the duration of a block.

    Args:
        console: Console that owns the alternate screen.
        fd: File descriptor of the controlling terminal.

    Yields:
        Rich Screen to update with each render.
    """
    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        with console.screen(hide_cursor=True) as screen:
            yield screen
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def visible_window(cursor: int | None, total: int, height: int) -> tuple[int, int]:
    """Compute the slice of rows to show so the cursor stays visible.

    Args:
        cursor: Index under the cursor, None when empty.
        total: Number of rows.
        height: Rows available.

    Returns:
        Tuple of (start, end) indices.
    """
    height = max(height, 1)
    if total <= height or cursor is None:
        return 0, min(total, height)
    start = min(max(cursor - height // 2, 0), total - height)
    return start, start + height


def _package_line(pkg: PackageRecord, selected: bool, under_cursor: bool) -> Text:
    marker = Text("[✓] " if selected else "[ ] ", style="selected" if selected else "muted")
    line = Text.assemble(
        marker,
        Text(pkg.name, style=repo_style(pkg.repository)),
        Text(f" {pkg.version}", style="package.version"),
        Text(f" ({pkg.size_human})", style="package.size"),
    )
    if under_cursor:
        line.stylize("reverse")
    return line


def render_session(session: SelectionSession, height: int) -> RenderableType:
    """Build the full-screen view of a selection session.

    Args:
        session: The session to draw.
        height: Terminal height in rows.

    Returns:
        Rich renderable with list, summary and help panels.
    """
    packages = session.packages
    start, end = visible_window(session.cursor, len(packages), height - _CHROME_ROWS)
    lines = [
        _package_line(packages[i], session.is_selected(i), i == session.cursor)
        for i in range(start, end)
    ]

    layout = Layout()
    layout.split_column(
        Layout(
            Panel(Group(*lines), title="Orphan Packages", border_style="border"),
            name="list",
        ),
        Layout(
            Panel(
                Text(
                    f"Selected: {session.selected_count} packages "
                    f"({format_mib(session.selected_size)})"
                ),
                title="Summary",
                border_style="border",
            ),
            name="summary",
            size=3,
        ),
        Layout(
            Panel(Text(HELP_TEXT, style="muted"), title="Help", border_style="border"),
            name="help",
            size=3,
        ),
    )
    return layout


def run_selection(
    packages: list[PackageRecord],
    console: Console | None = None,
    fd: int | None = None,
) -> tuple[PackageRecord, ...]:
    """Run an interactive selection session until confirmed or cancelled.

    Args:
        packages: Candidates in display order.
        console: Console to draw on. Defaults to the shared console.
        fd: Terminal file descriptor. Defaults to stdin.

    Returns:
        The confirmed packages, or an empty tuple if the user quit.
    """
    session = SelectionSession(packages)
    console = console or default_console
    fd = sys.stdin.fileno() if fd is None else fd

    with interactive_terminal(console, fd) as screen:
        while not session.finished:
            screen.update(render_session(session, console.size.height))
            try:
                key = read_key(fd)
            except (KeyboardInterrupt, EOFError):
                session.handle(SessionInput.QUIT)
                break
            event = decode_key(key)
            if event is not None:
                session.handle(event)

    return session.result()
