"""Shared configuration utilities (fluent_common.config).

This package provides:
- runtime: Environment-driven configuration (``ConfigManager`` singleton)
- project: YAML-based project/user configuration loader
"""

from .project import load_merged_config
from .runtime import ConfigManager

__all__ = [
    "ConfigManager",
    "load_merged_config",
]
