"""Racing an operation handle against a cancellable timeout delay."""

import asyncio
from typing import Any

from fluent_assertions.common.clock import IClock, ITimer
from fluent_common.config import ConfigManager
from fluent_logging import get_logger

from .outcome import Completed, Faulted, RaceOutcome, TimedOut

logger = get_logger(__name__)

# Clock readings that differ only by float rounding count as the same instant
_DEADLINE_TOLERANCE = 1e-9


def _settle(handle: "asyncio.Future[Any]") -> RaceOutcome:
    # A cancelled operation is terminal but not faulted
    if handle.cancelled():
        return Completed()
    exception = handle.exception()
    if exception is not None:
        return Faulted(exception)
    return Completed(handle.result())


def _observe_background_fault(handle: "asyncio.Future[Any]") -> None:
    if handle.cancelled():
        return
    exception = handle.exception()
    if exception is not None and ConfigManager().log_background_faults():
        logger.debug(
            "Timed-out operation faulted after its budget ran out",
            extra={
                "exception_type": type(exception).__name__,
                "exception_message": str(exception),
            },
        )


def observe_in_background(handle: "asyncio.Future[Any]") -> None:
    """Retrieve the eventual fault of an abandoned handle.

    The operation keeps running; once it finishes its fault is retrieved (so
    the loop does not warn about it) and logged, never re-raised.
    """
    handle.add_done_callback(_observe_background_fault)


async def _deadline(clock: IClock, timer: ITimer, remaining: float) -> None:
    await clock.delay(max(remaining - timer.elapsed, 0.0))


async def race(
    handle: "asyncio.Future[Any]",
    remaining: float,
    clock: IClock,
) -> RaceOutcome:
    """Wait for ``handle`` or for ``remaining`` seconds, whichever comes first.

    Parameters
    ----------
    handle : asyncio.Future
        In-flight operation; never cancelled here
    remaining : float
        Seconds left in the budget. A negative value short-circuits to
        :class:`TimedOut` without waiting.
    clock : IClock
        Source of the timeout delay

    Returns
    -------
    RaceOutcome
        ``Completed`` or ``Faulted`` when the operation finished first (it
        also wins when both sides are done at once), ``TimedOut`` otherwise.
        An operation that blocks the loop past the deadline before finishing
        has not finished first.
    """
    if remaining < 0:
        logger.debug("Budget exhausted before waiting", extra={"remaining_s": remaining})
        observe_in_background(handle)
        return TimedOut()

    if handle.done():
        return _settle(handle)

    # Anchored before the operation's first step runs; time spent blocking
    # the loop inside that step counts against the budget
    timer = clock.start_timer()
    finished_at: list[float] = []
    handle.add_done_callback(lambda _: finished_at.append(timer.elapsed))

    delay = asyncio.ensure_future(_deadline(clock, timer, remaining))
    try:
        await asyncio.wait({handle, delay}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        if not delay.done():
            delay.cancel()

    finish = finished_at[0] if finished_at else timer.elapsed
    if handle.done() and finish <= remaining + _DEADLINE_TOLERANCE:
        outcome = _settle(handle)
        logger.debug(
            "Operation finished within budget",
            extra={"outcome": type(outcome).__name__, "remaining_s": remaining},
        )
        return outcome

    logger.debug("Operation did not finish within budget", extra={"remaining_s": remaining})
    observe_in_background(handle)
    return TimedOut()


async def completes_within_timeout(
    handle: "asyncio.Future[Any]",
    remaining: float,
    clock: IClock,
) -> bool:
    """Whether ``handle`` finishes within ``remaining`` seconds.

    Raises
    ------
    BaseException
        The operation's own exception, unchanged, when it faulted in time
    """
    outcome = await race(handle, remaining, clock)
    if isinstance(outcome, Faulted):
        raise outcome.exception
    return isinstance(outcome, Completed)
