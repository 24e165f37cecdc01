"""Argument checks raised before any subject is invoked."""

from fluent_assertions.errors import ArgumentOutOfRangeError

from .clock import Duration, as_seconds


def throw_if_argument_is_negative(value: Duration, name: str) -> None:
    """Raise if a duration argument is negative.

    Parameters
    ----------
    value : Duration
        The duration to check
    name : str
        Parameter name used in the error message

    Raises
    ------
    ArgumentOutOfRangeError
        If ``value`` is below zero
    """
    if as_seconds(value) < 0:
        msg = f"The value of {name} must not be negative, got {value!r}"
        raise ArgumentOutOfRangeError(msg)
