"""Conftest utilities and fixtures package.

Modules
-------
environment
    Environment isolation and logging configuration
markers
    Location and option based marker application
"""

from tests._conftest.environment import (
    configure_test_logging,
    isolate_fluent_environment,
)
from tests._conftest.markers import add_location_based_markers, skip_timing_tests

__all__ = [
    "add_location_based_markers",
    "configure_test_logging",
    "isolate_fluent_environment",
    "skip_timing_tests",
]
