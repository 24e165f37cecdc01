"""Reading configuration files for fluent_common."""

from pathlib import Path
from typing import Any

import yaml


class FileOperationError(Exception):
    """Raised when a configuration file cannot be used."""


def read_yaml_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML document whose top level must be a mapping.

    An empty document counts as an empty mapping.

    Raises
    ------
    FileOperationError
        If the file cannot be read, is not valid YAML, or holds something
        other than a mapping
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read YAML file {path}: {e}"
        raise FileOperationError(msg) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise FileOperationError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Expected a mapping at the top of {path}, found {type(data).__name__}"
        raise FileOperationError(msg)
    return data
