"""Interactive selection state machine.

A SelectionSession turns an ordered list of candidate packages into a
confirmed subset. It knows nothing about terminals: the interactive
front end decodes key presses into SessionInput events and feeds them to
handle() one at a time.

States:
    BROWSING   the only non-terminal state
    CONFIRMED  terminal; result() is the selected subset
    CANCELLED  terminal; result() is empty
"""

from collections.abc import Sequence
from enum import Enum

from dude.models.package import PackageRecord


class SessionState(Enum):
    """Lifecycle state of a selection session."""

    BROWSING = "browsing"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class SessionInput(Enum):
    """Discrete input events accepted while browsing."""

    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    TOGGLE = "toggle"
    SELECT_ALL = "select_all"
    SELECT_NONE = "select_none"
    CONFIRM = "confirm"
    QUIT = "quit"


class SelectionSession:
    """Selection flags and a cursor over an ordered list of packages.

    The session exclusively owns its mutable state for its lifetime.
    Once it reaches a terminal state further input is ignored.

    Example:
        >>> session = SelectionSession(orphans)
        >>> session.handle(SessionInput.TOGGLE)
        >>> session.handle(SessionInput.CONFIRM)
        >>> chosen = session.result()
    """

    def __init__(self, packages: Sequence[PackageRecord]) -> None:
        """Initialize the session with nothing selected.

        Args:
            packages: Candidates in display order.
        """
        self._packages: tuple[PackageRecord, ...] = tuple(packages)
        self._selected: list[bool] = [False] * len(self._packages)
        self._cursor: int | None = 0 if self._packages else None
        self._state = SessionState.BROWSING

    @property
    def packages(self) -> tuple[PackageRecord, ...]:
        """Candidates in display order."""
        return self._packages

    @property
    def cursor(self) -> int | None:
        """Index under the cursor, None when there are no candidates."""
        return self._cursor

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def finished(self) -> bool:
        """Check if the session reached a terminal state."""
        return self._state != SessionState.BROWSING

    @property
    def flags(self) -> tuple[bool, ...]:
        """Snapshot of the per-index selection flags."""
        return tuple(self._selected)

    @property
    def selected_count(self) -> int:
        """Number of selected candidates."""
        return sum(self._selected)

    @property
    def selected_size(self) -> int:
        """Total size in bytes of the selected candidates."""
        return sum(
            pkg.size_bytes for pkg, sel in zip(self._packages, self._selected, strict=True) if sel
        )

    def is_selected(self, index: int) -> bool:
        """Check if the candidate at index is selected."""
        return self._selected[index]

    def handle(self, event: SessionInput) -> SessionState:
        """Apply one input event.

        Args:
            event: The decoded input.

        Returns:
            The state after the transition.
        """
        if self.finished:
            return self._state

        if event == SessionInput.MOVE_DOWN:
            self._move(1)
        elif event == SessionInput.MOVE_UP:
            self._move(-1)
        elif event == SessionInput.TOGGLE:
            if self._cursor is not None:
                self._selected[self._cursor] = not self._selected[self._cursor]
        elif event == SessionInput.SELECT_ALL:
            self._selected = [True] * len(self._packages)
        elif event == SessionInput.SELECT_NONE:
            self._selected = [False] * len(self._packages)
        elif event == SessionInput.CONFIRM:
            # Confirming with nothing selected is a no-op
            if any(self._selected):
                self._state = SessionState.CONFIRMED
        elif event == SessionInput.QUIT:
            self._state = SessionState.CANCELLED

        return self._state

    def _move(self, step: int) -> None:
        if self._cursor is None:
            return
        self._cursor = (self._cursor + step) % len(self._packages)

    def result(self) -> tuple[PackageRecord, ...]:
        """Return the chosen packages.

        Returns:
            Selected packages in original order if confirmed, otherwise
            an empty tuple.
        """
        if self._state != SessionState.CONFIRMED:
            return ()
        return tuple(
            pkg for pkg, sel in zip(self._packages, self._selected, strict=True) if sel
        )
