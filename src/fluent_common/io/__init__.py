"""IO helpers for fluent_common."""

from .files import FileOperationError, read_yaml_mapping

__all__ = [
    "FileOperationError",
    "read_yaml_mapping",
]
