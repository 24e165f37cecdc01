"""Logging filters."""

import logging

from .context import get_log_context


class ContextFilter(logging.Filter):
    """Copy the current log context onto each record.

    Keys already present on the record (for example from ``extra=``) are left
    untouched.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_log_context()
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        record.log_context = context
        return True
