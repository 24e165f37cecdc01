"""Entry points of the fluent API."""

import inspect
from typing import Any

from fluent_assertions.common.clock import IClock
from fluent_assertions.specialized import AsyncFunctionAssertions, DeferredOperation


def expect_async(
    subject: DeferredOperation | None,
    clock: IClock | None = None,
) -> AsyncFunctionAssertions:
    """Start assertions on a deferred operation.

    ``subject`` may be ``None``; every assertion then fails with a message
    saying so, without invoking anything.
    """
    return AsyncFunctionAssertions(subject, clock=clock)


def expect(subject: Any, clock: IClock | None = None) -> AsyncFunctionAssertions:
    """Start assertions on ``subject``.

    Parameters
    ----------
    subject : callable or None
        Zero-argument callable returning an awaitable, typically an
        ``async def`` function or a ``lambda`` wrapping a coroutine call
    clock : IClock, optional
        Timer source; the real clock by default

    Returns
    -------
    AsyncFunctionAssertions
        Assertions on the deferred operation

    Raises
    ------
    TypeError
        If ``subject`` is an awaitable rather than a callable producing one
    """
    if inspect.iscoroutine(subject):
        subject.close()
        msg = (
            "expect() needs a callable returning an awaitable, not a coroutine; "
            "pass the function (or a lambda) instead of calling it"
        )
        raise TypeError(msg)
    if subject is not None and not callable(subject):
        msg = f"expect() needs a callable returning an awaitable, got {type(subject).__name__}"
        raise TypeError(msg)
    return expect_async(subject, clock=clock)
