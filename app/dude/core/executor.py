"""Removal execution.

Translates a chosen package subset into a single removal request to an
operator, and sends the optional success notification.
"""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from dude.core.errors import RemovalError
from dude.models.removal import RemovalOutcome
from dude.utils.shell import command_exists, run_command

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dude.models.package import PackageRecord
    from dude.operators.base import Operator

logger = logging.getLogger(__name__)


class RemovalExecutor:
    """Issues one batch removal request per call.

    The operator's outcome is coarse: a mixed result where only some
    packages were removed is reported as a single failure.

    Attributes:
        operator: The removal agent to delegate to.
    """

    def __init__(self, operator: Operator) -> None:
        self.operator = operator

    def remove(self, selection: Sequence[PackageRecord], nosave: bool = False) -> RemovalOutcome:
        """Remove the selected packages in one request.

        Args:
            selection: Packages to remove.
            nosave: If True, also purge configuration and data.

        Returns:
            RemovalOutcome with the number of packages removed. The package
            database is not re-queried to verify.

        Raises:
            RemovalError: If the operator reports failure.
        """
        if not selection:
            return RemovalOutcome(removed_count=0, nosave=nosave)

        names = [pkg.name for pkg in selection]
        result = self.operator.remove(names, nosave=nosave)

        if result.failed:
            msg = f"Failed to remove packages: {result.error or 'unknown error'}"
            raise RemovalError(msg)

        logger.info("Removed %d package(s): %s", len(names), ", ".join(names))
        return RemovalOutcome(
            removed_count=len(names),
            packages=tuple(names),
            nosave=nosave,
            command=result.command,
        )


def send_notification(count: int) -> bool:
    """Send a desktop notification about a successful removal.

    Args:
        count: Number of packages removed.

    Returns:
        True if the notification was sent, False otherwise.
    """
    if not command_exists("notify-send"):
        logger.debug("notify-send not found, skipping notification")
        return False

    try:
        result = run_command(
            [
                "notify-send",
                "--app-name=dude",
                "--icon=package-x-generic",
                "--expire-time=5000",
                "dude",
                f"Successfully removed {count} orphan packages",
            ],
            timeout=10.0,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Failed to send notification: %s", e)
        return False

    if not result.success:
        logger.warning("notify-send failed: %s", result.stderr.strip())
        return False
    return True
