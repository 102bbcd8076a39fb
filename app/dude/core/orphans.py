"""Orphan classification.

An orphan is a package installed only as a dependency that nothing
installed requires or lists as optional anymore.
"""

import logging
from collections.abc import Iterable

from dude.models.package import InstalledPackage, PackageRecord

logger = logging.getLogger(__name__)


def is_orphan(pkg: InstalledPackage) -> bool:
    """Check if an installed package is a true orphan.

    Args:
        pkg: Package snapshot from the database.

    Returns:
        True if installed as a dependency and not referenced by any
        installed package, either as a requirement or as optional.
    """
    return pkg.is_dependency and not pkg.is_referenced


def classify(all_installed: Iterable[InstalledPackage]) -> list[PackageRecord]:
    """Return the orphans from a full installed-package listing.

    Entries that cannot be converted to a PackageRecord are dropped so
    that one bad database entry never blocks the whole operation.

    Args:
        all_installed: Every installed package from the package source.

    Returns:
        Orphans sorted by descending size; ties keep source order.
    """
    orphans: list[PackageRecord] = []
    for pkg in all_installed:
        if not is_orphan(pkg):
            continue
        try:
            orphans.append(pkg.to_record())
        except ValueError as e:
            logger.debug("Skipping unreadable package %r: %s", pkg.name, e)

    # list.sort is stable
    orphans.sort(key=lambda p: p.size_bytes, reverse=True)
    return orphans
