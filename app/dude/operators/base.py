"""Abstract base class for package removal operators.

This module defines the Operator interface that removal agents must
implement.
"""

from abc import ABC, abstractmethod

from dude.models.removal import RemovalResult


class Operator(ABC):
    """Abstract base class for removal operators.

    An operator removes a batch of packages in a single transaction and
    reports one success/failure for the whole batch. It is responsible
    for requesting elevated privilege when the process lacks it.

    Example:
        >>> operator = PacmanOperator()
        >>> if operator.is_available():
        ...     result = operator.remove(["libfoo", "libbar"], nosave=True)
        ...     print(result.success)
    """

    @abstractmethod
    def command_for(self, packages: list[str], nosave: bool = False) -> list[str]:
        """Build the argv that remove() would execute.

        Args:
            packages: Package names to remove.
            nosave: If True, also purge configuration and data.

        Returns:
            Command and arguments, including any privilege prefix.
        """

    @abstractmethod
    def remove(self, packages: list[str], nosave: bool = False) -> RemovalResult:
        """Remove packages in one transaction.

        Args:
            packages: Package names to remove.
            nosave: If True, also purge configuration and data.

        Returns:
            RemovalResult for the whole batch.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """
