"""Assertions for deferred (asynchronous) operations and the monitor behind them."""

from .async_function_assertions import AsyncFunctionAssertions
from .exception_assertions import ExceptionAssertions
from .exception_extractor import ExceptionExtractor
from .interception import ExceptionInterceptor
from .invocation import (
    DeferredOperation,
    Invocation,
    TimeBudget,
    invoke,
    invoke_with_timer,
)
from .outcome import Completed, Faulted, RaceOutcome, TimedOut
from .race import completes_within_timeout, observe_in_background, race

__all__ = [
    "AsyncFunctionAssertions",
    "Completed",
    "DeferredOperation",
    "ExceptionAssertions",
    "ExceptionExtractor",
    "ExceptionInterceptor",
    "Faulted",
    "Invocation",
    "RaceOutcome",
    "TimeBudget",
    "TimedOut",
    "completes_within_timeout",
    "invoke",
    "invoke_with_timer",
    "observe_in_background",
    "race",
]
