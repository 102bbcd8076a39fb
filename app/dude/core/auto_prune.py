"""Auto-prune decision policy and last-run state.

The policy is a pure decision function. The last-run marker is a
single-key store holding the time of the last successful auto-prune;
it must only be written after removal has actually succeeded.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from dude.core.config import AutoPruneConfig
from dude.core.errors import LastRunError
from dude.core.paths import ensure_dir, get_last_run_path
from dude.models.package import PackageRecord

logger = logging.getLogger(__name__)

BYTES_PER_MIB = 1_048_576


def should_auto_prune(
    orphans: Sequence[PackageRecord],
    cfg: AutoPruneConfig | None,
    last_run: datetime | None,
    now: datetime | None = None,
) -> bool:
    """Decide whether automatic pruning should proceed.

    Args:
        orphans: Candidate orphans after filtering.
        cfg: Auto-prune settings; None disables the feature.
        last_run: Time of the last successful auto-prune, None if never.
        now: Current time, defaults to the wall clock.

    Returns:
        True when the orphans reach the size threshold and enough whole
        days have passed since the last run.
    """
    if cfg is None:
        return False

    total_mb = sum(p.size_bytes for p in orphans) / BYTES_PER_MIB
    if total_mb < cfg.threshold_mb:
        logger.debug("Orphans total %.1f MiB, below threshold %d MiB", total_mb, cfg.threshold_mb)
        return False

    if last_run is not None:
        elapsed_days = ((now or datetime.now(UTC)) - last_run).days
        if elapsed_days < cfg.days_since_last_run:
            logger.debug(
                "Last auto-prune %d day(s) ago, need %d",
                elapsed_days,
                cfg.days_since_last_run,
            )
            return False

    return True


class LastRunStore:
    """Persisted timestamp of the last successful auto-prune.

    Storage location: ~/.local/state/dude/last_run

    The file holds a single base-10 integer of seconds since the epoch.
    A missing or corrupt file reads as "never run".
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize LastRunStore.

        Args:
            path: Optional override for the marker file.
                  Default: ~/.local/state/dude/last_run
        """
        self._path = path if path is not None else get_last_run_path()

    @property
    def path(self) -> Path:
        """Path to the last-run marker file."""
        return self._path

    def read(self) -> datetime | None:
        """Read the last successful run time.

        Returns:
            Timezone-aware datetime, or None if never run or unreadable.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read last-run marker %s: %s", self._path, e)
            return None

        try:
            return datetime.fromtimestamp(int(raw.strip()), tz=UTC)
        except (ValueError, OverflowError, OSError) as e:
            logger.warning("Ignoring corrupt last-run marker %s: %s", self._path, e)
            return None

    def record_run_now(self, now: datetime | None = None) -> Path:
        """Persist the current time as the last successful run.

        Args:
            now: Time to record, defaults to the wall clock.

        Returns:
            Path of the written marker.

        Raises:
            LastRunError: If the marker cannot be written.
        """
        timestamp = int((now or datetime.now(UTC)).timestamp())
        try:
            ensure_dir(self._path.parent, "state")
            self._path.write_text(f"{timestamp}\n", encoding="utf-8")
        except (RuntimeError, OSError) as e:
            msg = f"Failed to record last run in {self._path}: {e}"
            raise LastRunError(msg) from e

        logger.debug("Recorded auto-prune run at %d in %s", timestamp, self._path)
        return self._path
