"""dude - discover, review and remove orphaned pacman packages."""

__version__ = "0.1.0"
