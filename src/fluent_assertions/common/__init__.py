"""Timing and argument-checking primitives shared by the assertion classes."""

from .clock import Clock, Duration, Timer, as_seconds, as_timedelta
from .guard import throw_if_argument_is_negative

__all__ = [
    "Clock",
    "Duration",
    "Timer",
    "as_seconds",
    "as_timedelta",
    "throw_if_argument_is_negative",
]
