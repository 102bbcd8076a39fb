"""Unit tests for package models.

Tests for InstallReason, Repository, size formatting, PackageRecord and
InstalledPackage.
"""

from datetime import UTC, datetime

import pytest
from dude.models.package import (
    InstalledPackage,
    InstallReason,
    PackageRecord,
    Repository,
    format_mib,
    format_size,
)


class TestFormatSize:
    """Tests for format_size thresholds."""

    @pytest.mark.parametrize(
        ("size_bytes", "expected"),
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.0 KiB"),
            (1_048_575, "1024.0 KiB"),
            (1_048_576, "1.0 MiB"),
            (1_073_741_823, "1024.0 MiB"),
            (1_073_741_824, "1.0 GiB"),
        ],
    )
    def test_thresholds_are_inclusive(self, size_bytes: int, expected: str) -> None:
        """Each unit starts exactly at its power of 1024."""
        assert format_size(size_bytes) == expected

    def test_one_decimal(self) -> None:
        """Scaled sizes are rounded to one decimal."""
        assert format_size(1536) == "1.5 KiB"

    def test_format_mib(self) -> None:
        """format_mib always reports MiB."""
        assert format_mib(0) == "0.0 MiB"
        assert format_mib(524_288) == "0.5 MiB"
        assert format_mib(2 * 1_073_741_824) == "2048.0 MiB"


class TestRepository:
    """Tests for Repository enum."""

    def test_community_testing_value(self) -> None:
        """Hyphenated repository name maps to its member."""
        assert Repository("community-testing") == Repository.COMMUNITY_TESTING

    def test_values_are_unique(self) -> None:
        """All repository values are unique."""
        values = [r.value for r in Repository]
        assert len(values) == len(set(values))


class TestPackageRecord:
    """Tests for PackageRecord dataclass."""

    def test_create_record(self) -> None:
        """Can create a record with all fields."""
        installed = datetime(2024, 1, 15, tzinfo=UTC)
        record = PackageRecord(
            name="go",
            version="2:1.22.0-1",
            size_bytes=2048,
            repo="extra",
            install_time=installed,
        )
        assert record.name == "go"
        assert record.install_time == installed
        assert record.size_human == "2.0 KiB"

    def test_defaults(self) -> None:
        """Repo defaults to 'unknown' and install time to now."""
        before = datetime.now(UTC)
        record = PackageRecord(name="foo", version="1.0", size_bytes=0)
        assert record.repo == "unknown"
        assert record.install_time >= before

    def test_empty_name_raises(self) -> None:
        """Empty name raises ValueError."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            PackageRecord(name="", version="1.0", size_bytes=0)

    def test_negative_size_raises(self) -> None:
        """Negative size raises ValueError."""
        with pytest.raises(ValueError, match="cannot be negative"):
            PackageRecord(name="foo", version="1.0", size_bytes=-1)

    def test_is_immutable(self) -> None:
        """Records cannot be modified."""
        record = PackageRecord(name="foo", version="1.0", size_bytes=0)
        with pytest.raises(AttributeError):
            record.name = "bar"  # type: ignore[misc]

    def test_known_repository(self) -> None:
        """Known repo label resolves to a Repository member."""
        record = PackageRecord(name="foo", version="1.0", size_bytes=0, repo="multilib")
        assert record.repository == Repository.MULTILIB

    def test_unknown_repository(self) -> None:
        """Unknown repo label resolves to None."""
        record = PackageRecord(name="foo", version="1.0", size_bytes=0, repo="chaotic-aur")
        assert record.repository is None


class TestInstalledPackage:
    """Tests for InstalledPackage dataclass."""

    def test_is_dependency(self) -> None:
        """is_dependency follows the install reason."""
        dep = InstalledPackage(name="a", version="1", reason=InstallReason.DEPENDENCY)
        explicit = InstalledPackage(name="b", version="1", reason=InstallReason.EXPLICIT)
        assert dep.is_dependency is True
        assert explicit.is_dependency is False

    def test_is_referenced(self) -> None:
        """Required-by and optional-for both count as references."""
        required = InstalledPackage(
            name="a",
            version="1",
            reason=InstallReason.DEPENDENCY,
            required_by=frozenset({"x"}),
        )
        optional = InstalledPackage(
            name="b",
            version="1",
            reason=InstallReason.DEPENDENCY,
            optional_for=frozenset({"y"}),
        )
        free = InstalledPackage(name="c", version="1", reason=InstallReason.DEPENDENCY)
        assert required.is_referenced is True
        assert optional.is_referenced is True
        assert free.is_referenced is False

    def test_to_record_copies_fields(self) -> None:
        """to_record carries name, version, size, repo and install time."""
        installed = datetime(2024, 3, 6, 12, tzinfo=UTC)
        pkg = InstalledPackage(
            name="go",
            version="2:1.22.0-1",
            reason=InstallReason.DEPENDENCY,
            size_bytes=4096,
            repo="extra",
            install_time=installed,
        )
        record = pkg.to_record()
        assert record == PackageRecord(
            name="go",
            version="2:1.22.0-1",
            size_bytes=4096,
            repo="extra",
            install_time=installed,
        )

    def test_to_record_defaults_install_time(self) -> None:
        """Missing install time becomes the current time."""
        before = datetime.now(UTC)
        pkg = InstalledPackage(name="go", version="1", reason=InstallReason.DEPENDENCY)
        assert pkg.to_record().install_time >= before

    def test_to_record_rejects_empty_name(self) -> None:
        """to_record propagates record validation errors."""
        pkg = InstalledPackage(name="", version="1", reason=InstallReason.DEPENDENCY)
        with pytest.raises(ValueError):
            pkg.to_record()
