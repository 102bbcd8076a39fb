"""Layered configuration loading.

Configuration is read from two TOML layers, system-wide first and then
the user's own file:

- /etc/dude.conf
- ~/.config/dude/config

Layers are combined with merge_config(). A missing layer is skipped; a
layer that fails to parse or validate is ignored with a warning so that
the other layer and the defaults still apply. Unknown keys are logged
and dropped; the recognised keys of that layer still apply.
"""

import logging
import os
import tomllib
from collections.abc import Sequence
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dude.core.errors import ConfigError, ConfigParseError
from dude.core.paths import get_system_config_path, get_user_config_path

logger = logging.getLogger(__name__)


class AutoPruneConfig(BaseModel):
    """Settings for policy-gated unattended removal.

    Attributes:
        threshold_mb: Minimum total orphan size in MiB before pruning.
        days_since_last_run: Minimum whole days between automatic runs.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    threshold_mb: Annotated[int, Field(ge=0, description="Minimum orphan total in MiB")]
    days_since_last_run: Annotated[
        int,
        Field(ge=0, description="Minimum whole days between auto-prune runs"),
    ]


class DudeConfig(BaseModel):
    """Effective dude configuration.

    Attributes:
        whitelist: Package names that are never reported or removed.
        auto_prune: Auto-prune settings; None disables the feature.
        notify: Send a desktop notification after a successful removal.
    """

    model_config = ConfigDict(extra="ignore")

    whitelist: Annotated[
        list[str],
        Field(default_factory=list, description="Package names always excluded"),
    ]
    auto_prune: Annotated[
        AutoPruneConfig | None,
        Field(description="Auto-prune policy (None = disabled)"),
    ] = None
    notify: Annotated[bool, Field(description="Desktop notification on success")] = False


def merge_config(base: DudeConfig, layer: DudeConfig) -> DudeConfig:
    """Merge a later configuration layer onto an earlier one.

    Merge rules per field:

    - whitelist: accumulates; entries from the layer are appended and
      duplicates are dropped, keeping the first occurrence.
    - auto_prune: replaced wholesale when the layer sets it, never merged
      key by key.
    - notify: replaced when the layer sets it explicitly.

    Args:
        base: Configuration accumulated so far.
        layer: Configuration from the next source in precedence order.

    Returns:
        New DudeConfig; neither input is modified.
    """
    whitelist = list(dict.fromkeys([*base.whitelist, *layer.whitelist]))
    auto_prune = layer.auto_prune if layer.auto_prune is not None else base.auto_prune
    notify = layer.notify if "notify" in layer.model_fields_set else base.notify
    return DudeConfig(whitelist=whitelist, auto_prune=auto_prune, notify=notify)


def _unknown_keys(data: dict[str, object]) -> list[str]:
    """Return dotted names of keys no config model declares."""
    unknown = [key for key in data if key not in DudeConfig.model_fields]
    auto_prune = data.get("auto_prune")
    if isinstance(auto_prune, dict):
        unknown.extend(
            f"auto_prune.{key}"
            for key in auto_prune
            if key not in AutoPruneConfig.model_fields
        )
    return unknown


def load_config_layer(path: Path) -> DudeConfig | None:
    """Load a single configuration layer.

    Args:
        path: TOML file to read.

    Returns:
        Validated DudeConfig, or None if the file does not exist.

    Raises:
        ConfigParseError: If the file cannot be read, parsed or validated.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigParseError(f"Failed to read {path}: {e}") from e

    for key in _unknown_keys(data):
        logger.warning("Ignoring unknown config key '%s' in %s", key, path)

    try:
        return DudeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"Invalid config content in {path}: {e}") from e


def default_layer_paths() -> list[Path]:
    """Return configuration layer paths in precedence order (lowest first)."""
    return [get_system_config_path(), get_user_config_path()]


def load_config(paths: Sequence[Path] | None = None) -> DudeConfig:
    """Load and merge all configuration layers.

    Args:
        paths: Layer files in precedence order. Defaults to the system
            file followed by the user file.

    Returns:
        Merged configuration; defaults if no layer could be loaded.
    """
    config = DudeConfig()
    for path in paths if paths is not None else default_layer_paths():
        try:
            layer = load_config_layer(path)
        except ConfigParseError as e:
            logger.warning("Ignoring config layer: %s", e)
            continue
        if layer is None:
            logger.debug("No config at %s", path)
            continue
        config = merge_config(config, layer)
    return config


def config_to_dict(config: DudeConfig) -> dict[str, object]:
    """Convert a DudeConfig to a dictionary for TOML serialization.

    Args:
        config: The configuration to convert.

    Returns:
        Dictionary ready for TOML serialization; auto_prune is omitted
        when disabled since TOML has no null.
    """
    result: dict[str, object] = {
        "whitelist": list(config.whitelist),
        "notify": config.notify,
    }
    if config.auto_prune is not None:
        result["auto_prune"] = config.auto_prune.model_dump()
    return result


def save_config(config: DudeConfig, path: Path | None = None) -> Path:
    """Save a configuration layer to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The configuration to save.
        path: Destination. If None, uses the user config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_user_config_path()
    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path
