"""Log formatters."""

import json
import logging
from datetime import datetime, timezone

DEFAULT_FORMAT = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"

# LogRecord attributes that are never treated as structured extras
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
    | {"message", "asctime", "log_context"},
)


class SafeFormatter(logging.Formatter):
    """Formatter tolerant of records missing context attributes.

    ``WARNING`` is shortened to ``WARN`` so levels line up in columns.
    """

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt or DEFAULT_FORMAT, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelname == "WARNING":
            record.levelname = "WARN"
        if not hasattr(record, "log_context"):
            record.log_context = {}
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON line including structured extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))
