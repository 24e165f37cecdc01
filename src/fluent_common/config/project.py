"""Project/user YAML configuration loading.

This module locates, loads, and deep-merges configuration from the user
(~/.config/fluent_assertions/config.yaml) and project (.fluent-assertions.yaml)
files on top of the library defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fluent_common.io import FileOperationError, read_yaml_mapping

PROJECT_CONFIG_FILENAME = ".fluent-assertions.yaml"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two dictionaries in place and return ``base``.

    Values from ``override`` take precedence. Nested dicts are merged
    recursively; other values are replaced.
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def default_config() -> dict[str, Any]:
    """Return the default configuration structure."""
    return {
        "logging": {
            "level": "INFO",
            "log_background_faults": True,
        },
        "formatting": {
            "include_traceback": False,
            "max_value_length": 300,
        },
        "caller_identification": {
            "enabled": True,
        },
    }


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning an empty dict when missing or malformed."""
    try:
        if not path.exists():
            return {}
        return read_yaml_mapping(path)
    except FileOperationError:
        return {}


def get_user_config_path() -> Path:
    """Get path to the user-level configuration file."""
    return Path.home() / ".config" / "fluent_assertions" / "config.yaml"


def get_project_config_path(project_root: Path) -> Path:
    """Get path to the project-level configuration file."""
    return project_root / PROJECT_CONFIG_FILENAME


def load_merged_config(project_root: Path | None = None) -> dict[str, Any]:
    """Load default + user + project YAML config into a single dict.

    Parameters
    ----------
    project_root : Path, optional
        Directory holding the project file. Defaults to the working directory.
    """
    cfg = default_config()

    user_cfg = load_yaml(get_user_config_path())
    if user_cfg:
        deep_merge(cfg, user_cfg)

    project_cfg = load_yaml(get_project_config_path(project_root or Path.cwd()))
    if project_cfg:
        deep_merge(cfg, project_cfg)

    return cfg
