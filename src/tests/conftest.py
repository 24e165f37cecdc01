"""Root pytest configuration and shared fixtures for the fluent-assertions suite."""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

# Imports intentionally after path setup
from tests._conftest import (  # noqa: E402
    add_location_based_markers,
    configure_test_logging,
    isolate_fluent_environment,
    skip_timing_tests,
)

isolate_fluent_environment()
configure_test_logging()

from fluent_common.config import ConfigManager  # noqa: E402
from fluent_logging import clear_log_context  # noqa: E402
from tests._helpers import FakeClock  # noqa: E402


@pytest.fixture(autouse=True)
def reset_config_manager() -> Generator[None, None, None]:
    """Rebuild the configuration singleton around every test.

    Tests that change ``FLUENT_*`` variables through ``monkeypatch`` then see
    their values, and nothing leaks into the next test.
    """
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture(autouse=True)
def cleanup_logging_context() -> Generator[None, None, None]:
    """Clear logging context variables after each test."""
    yield
    clear_log_context()


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock whose time only advances when the test says so."""
    return FakeClock()


@pytest.fixture
def auto_clock() -> FakeClock:
    """Clock whose delays advance time by their own duration instantly."""
    return FakeClock(auto_advance=True)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add custom command line options."""
    parser.addoption(
        "--skip-timing",
        action="store_true",
        default=False,
        help="Skip tests that rely on real wall-clock delays",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Modify test collection to add markers based on location and options."""
    for item in items:
        add_location_based_markers(item)
        skip_timing_tests(config, item)
