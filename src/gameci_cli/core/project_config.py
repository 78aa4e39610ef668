"""Layered YAML configuration.

Layers, lowest precedence first:

1. built-in defaults (``default_config``)
2. ``~/.config/gameci/config.yaml``
3. ``<project>/.gameci.yaml``
4. the file given with ``--config`` / ``GAMECI_CONFIG``

The first three are optional. Mappings merge key by key; any other value in a
later layer replaces the earlier one.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from gameci.common.errors import ConfigError
from gameci_cli.core.constants import ProjectPaths


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``override``; neither input is modified."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def default_config() -> dict[str, Any]:
    return {
        "defaults": {
            "log_level": "INFO",
            "output": "gameci-out",
        },
        "image": {
            "repository": "unityci/editor",
            "toolchain": "3.1.0",
            "report": "eclipse-temurin",
        },
        "cache": {
            "volume": "lib",
        },
        "license": {
            "on_conflict": "error",
        },
    }


def read_config_file(path: Path, required: bool = False) -> dict[str, Any]:
    """Parse one configuration layer.

    Parameters
    ----------
    path : Path
        YAML file
    required : bool
        When False a missing file is an empty layer

    Returns
    -------
    dict[str, Any]
        Parsed mapping; an empty file yields ``{}``

    Raises
    ------
    ConfigError
        If the file is unreadable, is not valid YAML, or its top level is not
        a mapping
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        if not required:
            return {}
        msg = f"Config file not found: {path}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise ConfigError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at the top level, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def user_config_path() -> Path:
    return Path.home() / ProjectPaths.USER_CONFIG_DIR / ProjectPaths.USER_CONFIG


def load_merged_config(
    project_root: Path | None = None,
    config_file: Path | None = None,
) -> dict[str, Any]:
    """Merge every configuration layer that applies to ``project_root``."""
    cfg = deep_merge(default_config(), read_config_file(user_config_path()))
    if project_root is not None:
        project_file = project_root / ProjectPaths.PROJECT_CONFIG
        cfg = deep_merge(cfg, read_config_file(project_file))
    if config_file is not None:
        cfg = deep_merge(cfg, read_config_file(config_file, required=True))
    return cfg
