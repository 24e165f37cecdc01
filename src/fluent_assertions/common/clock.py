"""Wall-clock timing used to enforce time budgets.

Durations are accepted either as float seconds or as :class:`datetime.timedelta`
and handled internally as float seconds.
"""

import asyncio
import time
from datetime import timedelta
from typing import Protocol, TypeAlias

Duration: TypeAlias = float | int | timedelta


def as_seconds(duration: Duration) -> float:
    """Convert a duration to float seconds."""
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


def as_timedelta(duration: Duration) -> timedelta:
    """Convert a duration to a :class:`timedelta` for display."""
    if isinstance(duration, timedelta):
        return duration
    return timedelta(seconds=duration)


class ITimer(Protocol):
    """A running stopwatch."""

    @property
    def elapsed(self) -> float:
        """Seconds since the timer was started."""
        ...


class IClock(Protocol):
    """Source of timers and delays."""

    def start_timer(self) -> ITimer:
        """Start a new stopwatch."""
        ...

    async def delay(self, seconds: float) -> None:
        """Suspend for ``seconds``; cancel the awaiting task to stop early."""
        ...


class Timer:
    """Stopwatch backed by :func:`time.perf_counter` (monotonic)."""

    def __init__(self) -> None:
        self._started = time.perf_counter()

    @property
    def elapsed(self) -> float:
        """Seconds since the timer was started."""
        return time.perf_counter() - self._started


class Clock:
    """Default clock: real timers and ``asyncio.sleep`` based delays."""

    def start_timer(self) -> Timer:
        """Start a new stopwatch."""
        return Timer()

    async def delay(self, seconds: float) -> None:
        """Sleep on the running event loop.

        The delay is cancelled by cancelling the task awaiting it, which
        releases the underlying loop timer.
        """
        await asyncio.sleep(max(seconds, 0.0))
