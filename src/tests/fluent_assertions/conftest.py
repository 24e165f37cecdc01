"""Shared fixtures for fluent_assertions tests."""

import pytest

from fluent_common.config import ConfigManager


@pytest.fixture
def no_caller_identification(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable call-site naming so messages use their fallback context."""
    monkeypatch.setenv(ConfigManager.FLUENT_CALLER_IDENTIFICATION, "false")
    ConfigManager.reset()
