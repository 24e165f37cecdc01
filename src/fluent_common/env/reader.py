"""Typed readers for environment variables.

All readers return ``default`` when the variable is unset or blank. Values that
cannot be converted also fall back to ``default`` rather than raising, so a typo in
a shell profile never breaks a test run.
"""

import os

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def read_str(name: str, default: str | None = None) -> str | None:
    """Read a string variable, stripped of surrounding whitespace."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def read_bool(name: str, default: bool = False) -> bool:
    """Read a boolean variable.

    Accepts ``1/true/yes/on`` and ``0/false/no/off`` (case-insensitive).
    """
    value = read_str(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return default


def read_int(name: str, default: int | None = None) -> int | None:
    """Read an integer variable."""
    value = read_str(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default

