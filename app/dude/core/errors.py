"""Exception hierarchy for dude.

Per-record and per-config-layer problems are recovered locally and never
reach these types' callers; everything defined here stops the current
command with a message and a non-zero exit status.
"""


class DudeError(Exception):
    """Base exception for all dude errors."""


class SourceReadError(DudeError):
    """Raised when the installed-package database cannot be read."""


class ConfigError(DudeError):
    """Raised when a configuration file cannot be written."""


class ConfigParseError(ConfigError):
    """Raised when a configuration layer cannot be parsed or validated."""


class PatternError(DudeError):
    """Raised when a --keep pattern is not a valid regular expression.

    Attributes:
        pattern: The pattern that failed to compile.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class RemovalError(DudeError):
    """Raised when the removal agent fails or privilege is denied."""


class LastRunError(DudeError):
    """Raised when the last-run marker cannot be written."""
