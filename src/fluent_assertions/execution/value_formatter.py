"""Rendering of values substituted into failure messages."""

import traceback
from datetime import timedelta
from typing import Any

from fluent_common.config import ConfigManager

NONE_TEXT = "<None>"


def format_type(value: type) -> str:
    """Qualified name of a type; builtins are shown unqualified."""
    if value.__module__ == "builtins":
        return value.__qualname__
    return f"{value.__module__}.{value.__qualname__}"


def format_duration(value: timedelta) -> str:
    """Render durations as ``500ms`` below one second, otherwise ``1.5s``."""
    seconds = value.total_seconds()
    if abs(seconds) < 1:
        return f"{seconds * 1000:g}ms"
    return f"{seconds:g}s"


def format_exception(value: BaseException, include_traceback: bool = False) -> str:
    """Render an exception as ``Type: message``, optionally with its traceback."""
    message = str(value)
    text = f"{format_type(type(value))}: {message}" if message else format_type(type(value))
    if include_traceback and value.__traceback__ is not None:
        details = "".join(traceback.format_exception(value)).rstrip()
        text = f"{text}\n{details}"
    return text


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return f"{text[: max(limit - 3, 0)]}..."


def format_value(value: Any) -> str:
    """Render a value for inclusion in a failure message.

    Parameters
    ----------
    value : Any
        Value to render

    Returns
    -------
    str
        Human readable representation, truncated to the configured length.
        Exceptions with tracebacks are never truncated.
    """
    settings = ConfigManager()

    if value is None:
        return NONE_TEXT
    if isinstance(value, type):
        return format_type(value)
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, BaseException):
        include_traceback = settings.include_traceback()
        text = format_exception(value, include_traceback)
        if include_traceback:
            return text
        return _truncate(text, settings.get_max_value_length())
    if isinstance(value, str):
        return _truncate(f'"{value}"', settings.get_max_value_length())
    return _truncate(repr(value), settings.get_max_value_length())
