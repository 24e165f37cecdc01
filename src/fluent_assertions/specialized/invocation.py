"""Invocation of deferred operations with synchronous timing.

A deferred operation is a zero-argument callable returning an awaitable. It is
invoked exactly once per call here; the time spent before it hands back its
awaitable (its synchronous prefix) is charged against the time budget.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from fluent_assertions.common.clock import IClock
from fluent_assertions.errors import NonAwaitableSubjectError
from fluent_logging import get_logger

logger = get_logger(__name__)

DeferredOperation: TypeAlias = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class TimeBudget:
    """Allowed duration and the part of it already used, in seconds."""

    total: float
    elapsed: float

    @property
    def remaining(self) -> float:
        """Time left; negative once the synchronous prefix overran the budget."""
        return self.total - self.elapsed

    @property
    def exhausted(self) -> bool:
        return self.remaining < 0


@dataclass(frozen=True)
class Invocation:
    """Handle of a started operation together with its remaining budget."""

    handle: "asyncio.Future[Any]"
    budget: TimeBudget


def faulted_handle(exception: BaseException) -> "asyncio.Future[Any]":
    """Create an already-faulted handle carrying ``exception`` unchanged."""
    future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
    future.set_exception(exception)
    return future


def require_awaitable(result: Any) -> Awaitable[Any]:
    """Return ``result`` if it can be awaited.

    Raises
    ------
    NonAwaitableSubjectError
        If ``result`` is not awaitable
    """
    if not inspect.isawaitable(result):
        msg = (
            "Expected the subject to return an awaitable, "
            f"but it returned {type(result).__name__}"
        )
        raise NonAwaitableSubjectError(msg)
    return result


def invoke(subject: DeferredOperation) -> "asyncio.Future[Any]":
    """Invoke ``subject`` once and return a handle to its in-flight work.

    A synchronous raise is captured as an already-faulted handle, so callers
    inspect the handle rather than guarding the call.

    Raises
    ------
    NonAwaitableSubjectError
        If ``subject`` returns something that cannot be awaited
    """
    try:
        result = subject()
    except Exception as e:
        logger.debug(
            "Deferred operation raised synchronously",
            extra={"exception_type": type(e).__name__},
        )
        return faulted_handle(e)

    return asyncio.ensure_future(require_awaitable(result))


def invoke_with_timer(
    subject: DeferredOperation,
    timeout: float,
    clock: IClock,
) -> Invocation:
    """Invoke ``subject`` and measure its synchronous execution time.

    Parameters
    ----------
    subject : DeferredOperation
        Operation to start
    timeout : float
        Total budget in seconds
    clock : IClock
        Timer source

    Returns
    -------
    Invocation
        The handle and the budget left for asynchronous completion
    """
    timer = clock.start_timer()
    handle = invoke(subject)
    budget = TimeBudget(total=timeout, elapsed=timer.elapsed)

    logger.debug(
        "Invoked deferred operation",
        extra={
            "budget_total_s": budget.total,
            "sync_elapsed_s": budget.elapsed,
            "handle_done": handle.done(),
        },
    )
    return Invocation(handle=handle, budget=budget)
