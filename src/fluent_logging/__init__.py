"""Logging for fluent-assertions.

Library modules obtain loggers through :func:`get_logger`; nothing is emitted
until an application or test session calls :func:`configure_logger`.
"""

from .config import configure_logger, get_logger, get_test_logger
from .context import (
    clear_log_context,
    get_log_context,
    log_context,
    set_log_context,
)
from .filters import ContextFilter
from .formatters import JSONFormatter, SafeFormatter

__all__ = [
    "ContextFilter",
    "JSONFormatter",
    "SafeFormatter",
    "clear_log_context",
    "configure_logger",
    "get_log_context",
    "get_logger",
    "get_test_logger",
    "log_context",
    "set_log_context",
]
