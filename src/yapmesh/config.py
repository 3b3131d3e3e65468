"""Settings loading with a YAML override file.

Settings are read from the first YAML file found, in this order:

1. An explicit ``path`` passed to :func:`load_settings`
2. The file named by the ``YAPMESH_CONFIG`` environment variable
3. The user config file (``~/.config/yapmesh/config.yaml``, or
   ``%APPDATA%/yapmesh/config.yaml`` on Windows)

When no file is found the built-in defaults are used.

Example file::

    validate_edits: true
    free_edge_winding: one_two
    normal_epsilon: 1.0e-10
    log_level: DEBUG

Copyright (c) 2026 yapmesh contributors
MIT License
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from yapmesh.logging_config import level_from_name

logger = logging.getLogger(__name__)

__all__ = [
    "YAPMESH_CONFIG",
    "FREE_EDGE_WINDINGS",
    "MeshSettings",
    "load_settings",
    "user_config_path",
    "clear_cache",
]

# Environment variable naming a YAML settings file
YAPMESH_CONFIG = "YAPMESH_CONFIG"

FREE_EDGE_WINDINGS = ("two_one", "one_two")


@dataclass(frozen=True)
class MeshSettings:
    """Behavioural switches shared by every mesh operation."""

    validate_edits: bool = False
    free_edge_winding: str = "two_one"
    normal_epsilon: float = 1e-12
    log_level: str = "INFO"

    def __post_init__(self):
        if self.free_edge_winding not in FREE_EDGE_WINDINGS:
            raise ValueError(
                f"free_edge_winding must be one of {FREE_EDGE_WINDINGS}, "
                f"got {self.free_edge_winding!r}"
            )
        if self.normal_epsilon < 0:
            raise ValueError("normal_epsilon must be non-negative")
        if not isinstance(self.log_level, str):
            raise ValueError("log_level must be a level name such as 'INFO'")
        level_from_name(self.log_level)


def clear_cache() -> None:
    """Forget previously loaded settings.

    Call this after changing ``YAPMESH_CONFIG`` or editing the file.
    """
    _load_settings_cached.cache_clear()


def user_config_path() -> Path:
    """Return the location of the per-user settings file."""
    if sys.platform == "win32":
        config_base = Path(os.environ.get("APPDATA", "~")).expanduser()
    else:
        config_base = Path.home() / ".config"
    return config_base / "yapmesh" / "config.yaml"


def load_settings(path: Optional[str | Path] = None) -> MeshSettings:
    """Return the active :class:`MeshSettings`.

    Parameters
    ----------
    path : str or Path, optional
        Explicit settings file.  It must exist.
    """
    return _load_settings_cached(str(path) if path else None)


@lru_cache(maxsize=8)
def _load_settings_cached(path_str: Optional[str]) -> MeshSettings:
    if path_str:
        path = Path(path_str)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
        return _settings_from_file(path)

    env_path = os.environ.get(YAPMESH_CONFIG)
    if env_path:
        path = Path(env_path).expanduser()
        if path.is_file():
            return _settings_from_file(path)
        logger.warning(f"{YAPMESH_CONFIG} points to missing file {path}, ignoring")

    user_path = user_config_path()
    if user_path.is_file():
        return _settings_from_file(user_path)

    return MeshSettings()


def _settings_from_file(path: Path) -> MeshSettings:
    logger.debug(f"Loading settings from {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return MeshSettings()
    if not isinstance(data, dict):
        raise ValueError(f"Invalid settings format in {path}: expected mapping at root")
    return _settings_from_mapping(data, source=str(path))


def _settings_from_mapping(data: Dict[str, Any], source: str = "<mapping>") -> MeshSettings:
    known = {f.name: f for f in fields(MeshSettings)}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown setting {key!r} in {source}")
            continue
        default = getattr(MeshSettings, key)
        if isinstance(default, bool):
            if not isinstance(value, bool):
                raise ValueError(f"Setting {key!r} in {source} must be a boolean")
        elif isinstance(default, float):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Setting {key!r} in {source} must be a number")
            value = float(value)
        elif isinstance(default, str):
            if not isinstance(value, str):
                raise ValueError(f"Setting {key!r} in {source} must be a string")
        values[key] = value
    return MeshSettings(**values)
