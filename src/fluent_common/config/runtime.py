"""Runtime configuration resolved from YAML files and environment variables.

Environment variables always win over YAML values, so a single test run can be
tweaked without touching project files.
"""

from pathlib import Path
from typing import Any

from fluent_common.env import reader
from fluent_common.patterns import Singleton

from .project import load_merged_config

_VALID_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigManager(Singleton["ConfigManager"]):
    """Central access point for fluent-assertions settings."""

    FLUENT_LOG_LEVEL = "FLUENT_LOG_LEVEL"
    FLUENT_INCLUDE_TRACEBACK = "FLUENT_INCLUDE_TRACEBACK"
    FLUENT_MAX_VALUE_LENGTH = "FLUENT_MAX_VALUE_LENGTH"
    FLUENT_CALLER_IDENTIFICATION = "FLUENT_CALLER_IDENTIFICATION"
    FLUENT_LOG_BACKGROUND_FAULTS = "FLUENT_LOG_BACKGROUND_FAULTS"

    _initialized: bool

    def __init__(self, project_root: Path | None = None, **kwargs: Any) -> None:
        if self._initialized:
            return
        self._file_config = load_merged_config(project_root)
        self._initialized = True

    def _file_value(self, section: str, key: str) -> Any:
        return self._file_config.get(section, {}).get(key)

    def get_log_level(self) -> str:
        """Return the configured log level, upper-cased.

        Unknown level names fall back to ``INFO``.
        """
        level = reader.read_str(self.FLUENT_LOG_LEVEL) or str(
            self._file_value("logging", "level") or "INFO",
        )
        level = level.strip().upper()
        return level if level in _VALID_LOG_LEVELS else "INFO"

    def include_traceback(self) -> bool:
        """Whether failure messages render full tracebacks for exceptions."""
        return reader.read_bool(
            self.FLUENT_INCLUDE_TRACEBACK,
            default=bool(self._file_value("formatting", "include_traceback")),
        )

    def get_max_value_length(self) -> int:
        """Maximum characters of a formatted value before it is truncated."""
        default = self._file_value("formatting", "max_value_length") or 300
        value = reader.read_int(self.FLUENT_MAX_VALUE_LENGTH, default=int(default))
        return value if value and value > 0 else 300

    def is_caller_identification_enabled(self) -> bool:
        """Whether messages name the subject expression found at the call site."""
        default = self._file_value("caller_identification", "enabled")
        return reader.read_bool(
            self.FLUENT_CALLER_IDENTIFICATION,
            default=True if default is None else bool(default),
        )

    def log_background_faults(self) -> bool:
        """Whether faults of timed-out operations are logged once they surface."""
        default = self._file_value("logging", "log_background_faults")
        return reader.read_bool(
            self.FLUENT_LOG_BACKGROUND_FAULTS,
            default=True if default is None else bool(default),
        )
