"""Context variables carried into log records."""

import contextlib
from collections.abc import Iterator
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "fluent_log_context",
    default=None,
)


def set_log_context(**kwargs: Any) -> None:
    """Merge key/value pairs into the current log context."""
    current = dict(_log_context.get() or {})
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current log context."""
    return dict(_log_context.get() or {})


def clear_log_context() -> None:
    """Remove all log context values."""
    _log_context.set(None)


@contextlib.contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Temporarily extend the log context for the duration of a block."""
    token = _log_context.set({**(_log_context.get() or {}), **kwargs})
    try:
        yield
    finally:
        _log_context.reset(token)
