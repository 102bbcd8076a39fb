"""Abstract base class for package scanners.

This module defines the Scanner interface for reading the installed
package database.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from dude.models.package import InstalledPackage


class Scanner(ABC):
    """Abstract base class for installed-package scanners.

    Scanners query a package database and yield every installed package
    together with its install reason and reverse dependencies. Entries
    that cannot be parsed are skipped; only a failure to read the
    database as a whole is an error.

    Example:
        >>> scanner = PacmanScanner()
        >>> if scanner.is_available():
        ...     for pkg in scanner.scan():
        ...         print(f"{pkg.name}: {pkg.reason.value}")
    """

    @abstractmethod
    def scan(self) -> Iterator[InstalledPackage]:
        """Scan and yield all installed packages.

        Yields:
            InstalledPackage instances for each readable database entry.

        Raises:
            SourceReadError: If the package database cannot be read.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the package manager is available on the system.

        Returns:
            True if the package manager can be used, False otherwise.
        """
