import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml

from .errors import ConfigError
from .theme_files import STANDARD_SIZES

logger = logging.getLogger(__name__)

CONFIG_NAME = "koosh-cursors"

DEFAULT_SIZES = list(STANDARD_SIZES)
DEFAULT_HYPR_DESCRIPTION = "Koosh cursor theme with hyprcursor support for Wayland"


@dataclass
class ToolConfig:
    """Settings shared by every workflow."""

    icons_dir: str = "~/.icons"
    sizes: List[int] = field(default_factory=lambda: list(DEFAULT_SIZES))
    frame_delay: int = 100  # milliseconds per animation frame
    default_size: int = 48  # used when a frame's width cannot be read
    mode: int = 0o755
    hyprcursor_version: str = "1.0"
    hyprcursor_description: str = DEFAULT_HYPR_DESCRIPTION


# table -> {toml key: dataclass attribute}
_KEYS = {
    "theme": {
        "icons_dir": "icons_dir",
        "sizes": "sizes",
        "frame_delay": "frame_delay",
        "default_size": "default_size",
        "mode": "mode",
    },
    "hyprcursor": {
        "version": "hyprcursor_version",
        "description": "hyprcursor_description",
    },
}


def default_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return Path(config_home) / CONFIG_NAME / "config.toml"


def _positive_int(value, key):
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}")
    return value


def _parse_mode(value):
    # Accept both 0o755 and the more readable "755"
    if isinstance(value, str):
        try:
            return int(value, 8)
        except ValueError:
            raise ConfigError(f"mode must be an octal string, got {value!r}") from None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ConfigError(f"mode must be an octal string or integer, got {value!r}")


def config_from_dict(data: Dict[str, Any]) -> ToolConfig:
    """Build a ToolConfig from parsed TOML data, validating each value."""
    config = ToolConfig()

    for table, keys in data.items():
        if table not in _KEYS:
            logger.warning(f"config: ignoring unknown table [{table}]")
            continue
        if not isinstance(keys, dict):
            raise ConfigError(f"config: [{table}] must be a table")

        for key, value in keys.items():
            attr = _KEYS[table].get(key)
            if attr is None:
                logger.warning(f"config: ignoring unknown key {table}.{key}")
                continue

            if attr == "sizes":
                if not isinstance(value, list) or not value:
                    raise ConfigError("sizes must be a non-empty list of integers")
                value = [_positive_int(v, "sizes") for v in value]
            elif attr in ("frame_delay", "default_size"):
                value = _positive_int(value, key)
            elif attr == "mode":
                value = _parse_mode(value)
            elif not isinstance(value, str):
                raise ConfigError(f"{table}.{key} must be a string, got {value!r}")

            setattr(config, attr, value)

    return config


def load_config(path: Optional[str] = None) -> ToolConfig:
    """Load the tool configuration.

    An explicit path must exist. Without one, the default location is used
    when present, otherwise built-in defaults apply.
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"config file not found: {config_path}")
    else:
        config_path = default_config_path()
        if not config_path.is_file():
            logger.debug(f"no config at {config_path}, using defaults")
            return ToolConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = toml.load(f)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"invalid TOML in {config_path}: {e}") from e

    logger.debug(f"loaded config from {config_path}")
    return config_from_dict(data)
