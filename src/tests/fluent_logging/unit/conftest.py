"""Fixtures for fluent_logging unit tests."""

import logging
from collections.abc import Generator

import pytest


@pytest.fixture
def clean_logger(request: pytest.FixtureRequest) -> Generator[logging.Logger, None, None]:
    """Create a clean logger for testing.

    Yields
    ------
    logging.Logger
        Logger without handlers or filters, removed again afterwards
    """
    logger_name = f"fluent_assertions.test_unit.{request.node.name}"
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.filters.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = True

    yield logger

    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.filters.clear()
    logger.propagate = False


@pytest.fixture
def make_record():
    """Build LogRecords with sensible defaults."""

    def _make(msg: str = "test", level: int = logging.INFO, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="fluent_assertions.test",
            level=level,
            pathname="/path/to/test.py",
            lineno=42,
            msg=msg,
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    return _make
