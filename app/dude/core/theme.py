"""Theme management for the dude CLI.

Provides colour theming with optional user overrides from
~/.config/dude/theme.toml. Repository colours are a closed mapping from
the known sync repositories to theme styles, with an explicit default for
anything else.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme

from dude.core.paths import get_theme_path
from dude.models.package import Repository

logger = logging.getLogger(__name__)

# Style used for repositories outside the Repository enum ('local', 'unknown', ...)
DEFAULT_REPO_STYLE = "repo.other"

REPO_STYLES: dict[Repository, str] = {
    Repository.CORE: "repo.core",
    Repository.EXTRA: "repo.extra",
    Repository.COMMUNITY: "repo.community",
    Repository.COMMUNITY_TESTING: "repo.community",
    Repository.MULTILIB: "repo.multilib",
}


def repo_style(repository: Repository | None) -> str:
    """Return the theme style name for a repository.

    Args:
        repository: Known repository, or None when unrecognised.

    Returns:
        Style name usable in Rich markup.
    """
    if repository is None:
        return DEFAULT_REPO_STYLE
    return REPO_STYLES.get(repository, DEFAULT_REPO_STYLE)


class ThemeColors(BaseModel):
    """Color configuration for the dude CLI.

    All colors must be valid hex codes (#RRGGBB or #RGB).
    """

    model_config = ConfigDict(extra="forbid")

    # Base colors
    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    # Semantic colors
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Repository colors
    repo_core: str = "#f53263"
    repo_extra: str = "#03b971"
    repo_community: str = "#0e8ac8"
    repo_multilib: str = "#d44ebc"
    repo_other: str = "#f5b332"

    # Selection list
    selected: str = "#c1ff62"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Validate that all color values are valid hex codes."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        color_part = color[1:]
        if len(color_part) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        try:
            int(color_part, 16)
        except ValueError:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg) from None
        return color


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Load the colors section from a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Dictionary of color name to hex value, or None if loading failed.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse theme file %s: %s", path, e)
        return None
    except OSError as e:
        logger.warning("Failed to read theme file %s: %s", path, e)
        return None

    colors_raw: object = data.get("colors", {})
    if not isinstance(colors_raw, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return None
    return {
        key: value
        for key, value in cast(dict[str, object], colors_raw).items()
        if isinstance(value, str)
    }


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colors, applying user overrides on top of the defaults.

    Args:
        path: Override file to read. Defaults to ~/.config/dude/theme.toml.

    Returns:
        ThemeColors instance; defaults when the override is missing or invalid.
    """
    overrides = _load_toml_colors(path or get_theme_path())
    if not overrides:
        return ThemeColors()

    try:
        return ThemeColors(**overrides)
    except ValueError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Convert ThemeColors to a Rich Theme.

    Args:
        colors: ThemeColors instance to convert. If None, loads theme automatically.

    Returns:
        Rich Theme instance configured with the color scheme.
    """
    if colors is None:
        colors = load_theme()

    styles: dict[str, str] = {
        "text": colors.text,
        "muted": colors.muted,
        "header": colors.header,
        "border": colors.border,
        "success": colors.success,
        "warning": colors.warning,
        "error": f"bold {colors.error}",
        "info": colors.info,
        "selected": f"bold {colors.selected}",
        "bold_header": f"bold {colors.header}",
        "repo.core": colors.repo_core,
        "repo.extra": colors.repo_extra,
        "repo.community": colors.repo_community,
        "repo.multilib": colors.repo_multilib,
        DEFAULT_REPO_STYLE: colors.repo_other,
        "package.version": colors.muted,
        "package.size": colors.info,
    }

    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading and caching it if necessary.

    Returns:
        Cached Rich Theme instance.
    """
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
