"""Fixtures for patterns module tests."""

from collections.abc import Generator

import pytest

from fluent_common.patterns.singleton import Singleton


@pytest.fixture(autouse=True)
def reset_all_singletons() -> Generator[None, None, None]:
    """Reset all singleton instances before each test.

    This ensures test isolation by clearing the singleton registry.
    """
    Singleton._instances.clear()
    yield
    Singleton._instances.clear()
