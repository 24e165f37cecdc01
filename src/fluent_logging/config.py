"""Logger configuration profiles.

Two profiles exist:

- ``library``: console output through :class:`SafeFormatter` (or JSON when
  ``json_format`` is set), used by applications embedding the library
- ``test``: DEBUG-friendly console output for the test suite
"""

import logging
import sys

from fluent_common.config import ConfigManager

from .filters import ContextFilter
from .formatters import JSONFormatter, SafeFormatter

ROOT_LOGGER_NAME = "fluent_assertions"
TRACE = 5

logging.addLevelName(TRACE, "TRACE")
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

_PROFILES = frozenset({"library", "test"})


def get_log_level() -> str:
    """Return the configured log level name."""
    return ConfigManager().get_log_level()


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``fluent_assertions`` hierarchy.

    Parameters
    ----------
    name : str
        Usually ``__name__`` of the calling module

    Returns
    -------
    logging.Logger
        The logger; names outside the hierarchy are nested under it
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logger(
    name: str = ROOT_LOGGER_NAME,
    profile: str = "library",
    level: str | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure a logger according to a named profile.

    Existing handlers and filters are replaced, so calling this twice is safe.

    Parameters
    ----------
    name : str
        Logger name
    profile : str
        ``library`` or ``test``
    level : str, optional
        Level name; defaults to the configured ``FLUENT_LOG_LEVEL``
    json_format : bool
        Emit JSON lines instead of plain text

    Returns
    -------
    logging.Logger
        The configured logger

    Raises
    ------
    ValueError
        If ``profile`` is unknown
    """
    if profile not in _PROFILES:
        msg = f"Unknown profile: {profile}"
        raise ValueError(msg)

    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for existing in list(logger.filters):
        logger.removeFilter(existing)

    level_name = (level or ("DEBUG" if profile == "test" else get_log_level())).upper()
    logger.setLevel(logging.getLevelName(level_name))

    stream = sys.stderr if profile == "library" else sys.stdout
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter() if json_format else SafeFormatter())
    handler.addFilter(ContextFilter())
    logger.addHandler(handler)
    logger.propagate = profile == "test"
    return logger


def get_test_logger(name: str) -> logging.Logger:
    """Return a logger configured with the ``test`` profile."""
    return configure_logger(name, profile="test")
