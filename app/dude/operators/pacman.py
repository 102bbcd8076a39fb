"""Pacman removal operator implementation.

Removes packages with ``pacman -Rs`` (keep backups of modified config
files) or ``pacman -Rns`` (no backups), escalating through sudo when the
process is not already root.
"""

import logging

from dude.models.removal import RemovalResult
from dude.operators.base import Operator
from dude.utils.shell import command_exists, is_root, run_interactive

logger = logging.getLogger(__name__)


class PacmanOperator(Operator):
    """Operator for pacman package removal.

    The command runs attached to the terminal so that sudo can ask for a
    password and pacman can show its own transaction summary and prompt.
    The transaction is atomic from pacman's point of view: it either
    removes the whole batch or nothing, so the result is a single flag.
    """

    def is_available(self) -> bool:
        """Check if pacman is available."""
        return command_exists("pacman")

    def command_for(self, packages: list[str], nosave: bool = False) -> list[str]:
        """Build the pacman removal command.

        Args:
            packages: Package names to remove.
            nosave: If True, use -Rns instead of -Rs.

        Returns:
            Command and arguments, prefixed with sudo when not root.
        """
        args = ["pacman", "-Rns" if nosave else "-Rs", *packages]
        if is_root():
            return args
        return ["sudo", *args]

    def remove(self, packages: list[str], nosave: bool = False) -> RemovalResult:
        """Remove packages using a single pacman transaction.

        Args:
            packages: Package names to remove.
            nosave: If True, also remove configuration backups.

        Returns:
            RemovalResult for the whole batch.
        """
        if not self.is_available():
            return RemovalResult(success=False, error="pacman is not available on this system")

        args = self.command_for(packages, nosave)
        if args[0] == "sudo" and not command_exists("sudo"):
            return RemovalResult(
                success=False,
                command=tuple(args),
                error="root privileges are required and sudo is not available",
            )

        logger.info(
            "Executing pacman removal for packages: %s (nosave=%s)",
            ", ".join(packages),
            nosave,
        )

        try:
            returncode = run_interactive(args)
        except OSError as e:
            return RemovalResult(success=False, command=tuple(args), error=str(e))

        if returncode != 0:
            return RemovalResult(
                success=False,
                command=tuple(args),
                error=f"{args[0]} exited with status {returncode}",
            )
        return RemovalResult(success=True, command=tuple(args))
