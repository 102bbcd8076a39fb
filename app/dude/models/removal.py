"""Removal result model.

The removal agent reports a single outcome for the whole batch; there is
no per-package result.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RemovalOutcome:
    """Result of a successful (or empty) removal request.

    Attributes:
        removed_count: Number of packages in the removed batch.
        packages: Names passed to the removal agent, in order.
        nosave: Whether configuration/data was purged as well.
        command: The argv that was executed, empty when nothing ran.
    """

    removed_count: int
    packages: tuple[str, ...] = field(default=())
    nosave: bool = False
    command: tuple[str, ...] = field(default=())

    @property
    def is_noop(self) -> bool:
        """Check if no removal was issued."""
        return self.removed_count == 0


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Coarse outcome reported by a removal agent for one batch.

    Attributes:
        success: Whether the whole transaction succeeded.
        command: The argv that was executed.
        error: Failure description when success is False.
    """

    success: bool
    command: tuple[str, ...] = field(default=())
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the removal failed."""
        return not self.success
