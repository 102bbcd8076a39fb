"""Package models for orphan classification.

This module defines the raw snapshot of an installed package as reported
by the package database, and the immutable record that flows through
filtering, selection and removal.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class InstallReason(Enum):
    """Recorded intent at install time.

    Distinguishes between packages explicitly requested by the user
    and those pulled in to satisfy another package's dependency.
    """

    EXPLICIT = "explicit"
    DEPENDENCY = "dependency"


class Repository(Enum):
    """Known sync repositories, used for display colouring only."""

    CORE = "core"
    EXTRA = "extra"
    COMMUNITY = "community"
    COMMUNITY_TESTING = "community-testing"
    MULTILIB = "multilib"


def format_size(size_bytes: int) -> str:
    """Return a human-readable binary size string.

    Each threshold is inclusive, so exactly 1024 bytes is "1.0 KiB"
    and one byte less than a MiB is "1024.0 KiB".

    Args:
        size_bytes: Size in bytes.

    Returns:
        Size formatted as B, KiB, MiB or GiB.
    """
    if size_bytes >= 1_073_741_824:
        return f"{size_bytes / 1_073_741_824:.1f} GiB"
    if size_bytes >= 1_048_576:
        return f"{size_bytes / 1_048_576:.1f} MiB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KiB"
    return f"{size_bytes} B"


def format_mib(size_bytes: int) -> str:
    """Return a size in MiB with one decimal, used for aggregate totals."""
    return f"{size_bytes / 1_048_576:.1f} MiB"


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """Immutable snapshot of one orphan candidate.

    Attributes:
        name: Package name, unique within a database snapshot.
        version: Installed version, display only.
        size_bytes: Installed footprint in bytes.
        repo: Origin repository label (e.g. 'extra').
        install_time: When the package was installed.
    """

    name: str
    version: str
    size_bytes: int
    repo: str = field(default="unknown")
    install_time: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Package size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def size_human(self) -> str:
        """Return human-readable size string."""
        return format_size(self.size_bytes)

    @property
    def repository(self) -> Repository | None:
        """Return the known repository for this record, if any."""
        try:
            return Repository(self.repo)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class InstalledPackage:
    """A package as reported by the package database.

    Carries the reverse-dependency information needed for orphan
    classification. No validation happens here; conversion to a
    PackageRecord is where unusable entries are rejected.

    Attributes:
        name: Package name.
        version: Installed version string.
        reason: Why the package was installed.
        required_by: Installed packages that depend on this one.
        optional_for: Installed packages that list this one as optional.
        size_bytes: Installed size in bytes.
        repo: Sync repository providing the package.
        install_time: Install timestamp, if the database reports one.
    """

    name: str
    version: str
    reason: InstallReason
    required_by: frozenset[str] = field(default_factory=frozenset)
    optional_for: frozenset[str] = field(default_factory=frozenset)
    size_bytes: int = 0
    repo: str = "unknown"
    install_time: datetime | None = None

    @property
    def is_dependency(self) -> bool:
        """Check if package was installed as a dependency."""
        return self.reason == InstallReason.DEPENDENCY

    @property
    def is_referenced(self) -> bool:
        """Check if any installed package requires or optionally uses this one."""
        return bool(self.required_by or self.optional_for)

    def to_record(self) -> PackageRecord:
        """Convert into an immutable PackageRecord.

        Returns:
            PackageRecord with install time defaulting to now.

        Raises:
            ValueError: If the name is empty or the size is negative.
        """
        return PackageRecord(
            name=self.name,
            version=self.version,
            size_bytes=self.size_bytes,
            repo=self.repo or "unknown",
            install_time=self.install_time or _now(),
        )
