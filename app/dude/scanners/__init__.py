"""Package scanners for the installed-package database.

This module exports the scanner classes for querying installed packages.
"""

from dude.scanners.base import Scanner
from dude.scanners.pacman import PacmanScanner

__all__ = ["PacmanScanner", "Scanner"]
