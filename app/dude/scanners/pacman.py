"""Pacman package scanner implementation.

Reads the local package database with ``pacman -Qi`` and resolves the
sync repository of each package with ``pacman -Sl``.
"""

import logging
import re
from collections.abc import Iterator
from datetime import UTC, datetime

from dude.core.errors import SourceReadError
from dude.models.package import InstalledPackage, InstallReason
from dude.scanners.base import Scanner
from dude.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Force untranslated field names and C-locale dates
_PACMAN_ENV = {"LC_ALL": "C"}

_REASONS: dict[str, InstallReason] = {
    "Explicitly installed": InstallReason.EXPLICIT,
    "Installed as a dependency for another package": InstallReason.DEPENDENCY,
}

_SIZE_UNITS: dict[str, int] = {
    "B": 1,
    "KiB": 1024,
    "MiB": 1024**2,
    "GiB": 1024**3,
    "TiB": 1024**4,
}

_SIZE_RE = re.compile(r"^(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>[KMGT]?i?B)$")

# C locale %c first, then the common en_US rendering
_DATE_FORMATS = (
    "%a %b %d %H:%M:%S %Y",
    "%a %d %b %Y %I:%M:%S %p %Z",
    "%a %d %b %Y %H:%M:%S %Z",
)


def parse_size(value: str) -> int | None:
    """Parse a pacman size string like '329.22 KiB' into bytes.

    Args:
        value: Size as printed by pacman.

    Returns:
        Size in bytes, or None if the string is not a size.
    """
    match = _SIZE_RE.match(value.strip())
    if match is None:
        return None
    unit = match.group("unit")
    if unit not in _SIZE_UNITS:
        return None
    return round(float(match.group("value")) * _SIZE_UNITS[unit])


def parse_install_date(value: str) -> datetime | None:
    """Parse a pacman install date.

    Args:
        value: Date as printed by pacman.

    Returns:
        Timezone-aware datetime in UTC, or None if unparseable.
    """
    normalized = " ".join(value.split())
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(normalized, fmt)
        except ValueError:
            continue
        # Naive timestamps are local time
        return parsed.astimezone(UTC)
    return None


def _parse_name_list(value: str) -> frozenset[str]:
    """Parse a whitespace-separated pacman name list, where 'None' means empty."""
    if not value or value == "None":
        return frozenset()
    return frozenset(value.split())


def split_blocks(output: str) -> Iterator[dict[str, str]]:
    """Split ``pacman -Qi`` output into one field mapping per package.

    Continuation lines (indented) are joined onto the previous field.

    Args:
        output: Raw stdout of ``pacman -Qi``.

    Yields:
        Dictionary of field name to value for each package block.
    """
    fields: dict[str, str] = {}
    last_key: str | None = None

    for line in output.splitlines():
        if not line.strip():
            if fields:
                yield fields
            fields = {}
            last_key = None
            continue

        if line[0].isspace():
            if last_key is not None:
                fields[last_key] = f"{fields[last_key]} {line.strip()}".strip()
            continue

        key, sep, value = line.partition(":")
        if not sep:
            logger.debug("Skipping unrecognised pacman line: %r", line[:100])
            continue
        last_key = key.strip()
        fields[last_key] = value.strip()

    if fields:
        yield fields


class PacmanScanner(Scanner):
    """Scanner for the pacman local database.

    Uses ``pacman -Qi`` for package attributes and reverse dependencies,
    and ``pacman -Sl`` to find which sync repository provides each
    installed package. Packages not found in any sync repository keep
    the 'unknown' repository label.
    """

    def is_available(self) -> bool:
        """Check if pacman is available."""
        return command_exists("pacman")

    def scan(self) -> Iterator[InstalledPackage]:
        """Scan all installed pacman packages.

        Yields:
            InstalledPackage for each readable package entry.

        Raises:
            SourceReadError: If pacman is missing or ``pacman -Qi`` fails.
        """
        if not self.is_available():
            msg = "pacman is not available on this system"
            raise SourceReadError(msg)

        repos = self._get_repo_map()

        try:
            result = run_command(["pacman", "-Qi"], env=_PACMAN_ENV, timeout=None)
        except OSError as e:
            msg = f"Failed to run pacman: {e}"
            raise SourceReadError(msg) from e

        if not result.success:
            msg = f"pacman -Qi failed: {result.stderr.strip() or 'unknown error'}"
            raise SourceReadError(msg)

        for fields in split_blocks(result.stdout):
            package = self._parse_block(fields, repos)
            if package is not None:
                yield package

    def _get_repo_map(self) -> dict[str, str]:
        """Map installed package names to their sync repository.

        A failure here only affects display colouring, so it is logged
        and an empty mapping is returned.

        Returns:
            Dictionary of package name to repository name.
        """
        try:
            result = run_command(["pacman", "-Sl"], env=_PACMAN_ENV, timeout=None)
        except OSError as e:
            logger.warning("pacman -Sl could not be run: %s", e)
            return {}

        if not result.success:
            logger.warning("pacman -Sl failed: %s", result.stderr.strip() or "unknown error")
            return {}

        repos: dict[str, str] = {}
        for line in result.stdout.splitlines():
            parts = line.split()
            if len(parts) >= 4 and parts[3].startswith("[installed"):
                repos[parts[1]] = parts[0]
        return repos

    def _parse_block(
        self,
        fields: dict[str, str],
        repos: dict[str, str],
    ) -> InstalledPackage | None:
        """Parse one ``pacman -Qi`` block.

        Args:
            fields: Field mapping from split_blocks().
            repos: Package name to repository mapping.

        Returns:
            InstalledPackage if the block is usable, None otherwise.
        """
        name = fields.get("Name", "")
        version = fields.get("Version", "")
        if not name or not version:
            logger.debug("Skipping pacman entry without name/version: %r", name)
            return None

        reason = _REASONS.get(fields.get("Install Reason", ""))
        if reason is None:
            logger.debug(
                "Skipping %s: unknown install reason %r", name, fields.get("Install Reason")
            )
            return None

        size_bytes = parse_size(fields.get("Installed Size", ""))
        if size_bytes is None:
            logger.debug("Skipping %s: unreadable size %r", name, fields.get("Installed Size"))
            return None

        return InstalledPackage(
            name=name,
            version=version,
            reason=reason,
            required_by=_parse_name_list(fields.get("Required By", "")),
            optional_for=_parse_name_list(fields.get("Optional For", "")),
            size_bytes=size_bytes,
            repo=repos.get(name, "unknown"),
            install_time=parse_install_date(fields.get("Install Date", "")),
        )
