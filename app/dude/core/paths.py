"""XDG-compliant path management for dude.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage, plus the system-wide
configuration file location.

XDG defaults:
- Config: ~/.config/dude/
- State: ~/.local/state/dude/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dude"

# System-wide configuration, read before the user layer
SYSTEM_CONFIG_PATH = Path("/etc/dude.conf")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dude/ (or XDG_CONFIG_HOME/dude/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data is the auto-prune last-run marker, which must persist
    between runs but is not configuration.

    Returns:
        Path to ~/.local/state/dude/ (or XDG_STATE_HOME/dude/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_system_config_path() -> Path:
    """Get the system-wide configuration file path.

    Returns:
        Path to /etc/dude.conf.
    """
    return SYSTEM_CONFIG_PATH


def get_user_config_path() -> Path:
    """Get the user configuration file path.

    Returns:
        Path to ~/.config/dude/config.
    """
    return get_config_dir() / "config"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/dude/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_last_run_path() -> Path:
    """Get the auto-prune last-run marker path.

    Returns:
        Path to ~/.local/state/dude/last_run.
    """
    return get_state_dir() / "last_run"


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
