"""Policy filters over an orphan list.

Both filters return a new list and never modify their input. They are
idempotent and commute with each other.
"""

import re
from collections.abc import Iterable, Sequence

from dude.core.errors import PatternError
from dude.models.package import PackageRecord


def exclude_whitelisted(
    orphans: Sequence[PackageRecord],
    names: Iterable[str],
) -> list[PackageRecord]:
    """Drop records whose name is exactly a whitelist entry.

    Args:
        orphans: Orphan records.
        names: Whitelisted package names (exact match, not patterns).

    Returns:
        Records not on the whitelist, order preserved.
    """
    whitelist = set(names)
    return [pkg for pkg in orphans if pkg.name not in whitelist]


def exclude_matching(orphans: Sequence[PackageRecord], pattern: str) -> list[PackageRecord]:
    """Drop records whose name matches a regular expression.

    The pattern is searched anywhere in the name; anchor it with ^ or $
    to match a prefix or suffix.

    Args:
        orphans: Orphan records.
        pattern: Regular expression of names to keep out of the result.

    Returns:
        Records whose name does not match, order preserved.

    Raises:
        PatternError: If the pattern does not compile.
    """
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e
    return [pkg for pkg in orphans if regex.search(pkg.name) is None]
