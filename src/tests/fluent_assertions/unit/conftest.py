"""Fixtures for fluent_assertions unit tests."""

import logging

import pytest


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture DEBUG records emitted by the library."""
    caplog.set_level(logging.DEBUG, logger="fluent_assertions")
    return caplog
