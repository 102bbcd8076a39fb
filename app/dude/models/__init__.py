"""Data models for dude.

This module exports the core data structures used throughout the application.
"""

from dude.models.package import (
    InstalledPackage,
    InstallReason,
    PackageRecord,
    Repository,
    format_mib,
    format_size,
)
from dude.models.removal import RemovalOutcome, RemovalResult

__all__ = [
    "InstallReason",
    "InstalledPackage",
    "PackageRecord",
    "RemovalOutcome",
    "RemovalResult",
    "Repository",
    "format_mib",
    "format_size",
]
