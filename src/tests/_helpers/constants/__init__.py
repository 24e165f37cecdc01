"""Test constants for the fluent-assertions suite."""

from tests._helpers.constants.timeouts import TestTimeouts

__all__ = [
    "TestTimeouts",
]
