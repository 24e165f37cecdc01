"""Assertions on asynchronous functions: timing and exceptions.

Each assertion first checks that a subject is present and never invokes a
missing one. Failures are reported through :class:`AssertionChain`, so inside an
:class:`AssertionScope` they are collected instead of raised.
"""

import functools
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar

from fluent_assertions.and_constraint import AndConstraint
from fluent_assertions.common.clock import (
    Clock,
    Duration,
    IClock,
    as_seconds,
    as_timedelta,
)
from fluent_assertions.common.guard import throw_if_argument_is_negative
from fluent_assertions.errors import NonAwaitableSubjectError
from fluent_assertions.execution import AssertionChain, Execute
from fluent_logging import get_logger, log_context

from .exception_assertions import ExceptionAssertions
from .exception_extractor import ExceptionExtractor
from .interception import ExceptionInterceptor
from .invocation import DeferredOperation, invoke_with_timer, require_awaitable
from .race import completes_within_timeout, observe_in_background

logger = get_logger(__name__)

E = TypeVar("E", bound=BaseException)
T = TypeVar("T")


async def _resolved(value: T) -> T:
    return value


def _in_log_context(
    func: Callable[..., Coroutine[Any, Any, T]],
) -> Callable[..., Coroutine[Any, Any, T]]:
    """Tag log records emitted while the assertion runs with its name."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        with log_context(assertion=func.__name__):
            return await func(*args, **kwargs)

    return wrapper


class AsyncFunctionAssertions:
    """Assertions for a deferred operation (a callable returning an awaitable).

    Parameters
    ----------
    subject : DeferredOperation, optional
        The operation under test; ``None`` fails every assertion
    clock : IClock, optional
        Timer source, replaceable in tests
    extractor : ExceptionExtractor, optional
        Strategy selecting the exceptions matched by ``to_throw``
    """

    identifier = "async function"

    def __init__(
        self,
        subject: DeferredOperation | None,
        clock: IClock | None = None,
        extractor: ExceptionExtractor | None = None,
    ) -> None:
        self.subject = subject
        self.clock = clock or Clock()
        self.extractor = extractor or ExceptionExtractor()
        self._interceptor = ExceptionInterceptor(self.clock)

    def _assertion(self) -> AssertionChain:
        return Execute.assertion(self.identifier)

    @_in_log_context
    async def to_complete_within(
        self,
        time_span: Duration,
        because: str = "",
        *because_args: Any,
    ) -> AndConstraint["AsyncFunctionAssertions"]:
        """Assert the operation completes within ``time_span``.

        A fault raised within the time span propagates unchanged.
        """
        display = as_timedelta(time_span)
        success = (
            self._assertion()
            .for_condition(self.subject is not None)
            .because_of(because, *because_args)
            .fail_with(
                "Expected {context:task} to complete within {0}{reason}, but found <None>.",
                display,
            )
        )

        if success:
            invocation = invoke_with_timer(self.subject, as_seconds(time_span), self.clock)
            if invocation.budget.exhausted:
                observe_in_background(invocation.handle)

            success = (
                self._assertion()
                .for_condition(not invocation.budget.exhausted)
                .because_of(because, *because_args)
                .fail_with("Expected {context:task} to complete within {0}{reason}.", display)
            )

            if success:
                completed = await completes_within_timeout(
                    invocation.handle,
                    invocation.budget.remaining,
                    self.clock,
                )
                (
                    self._assertion()
                    .for_condition(completed)
                    .because_of(because, *because_args)
                    .fail_with("Expected {context:task} to complete within {0}{reason}.", display)
                )

        return AndConstraint(self)

    @_in_log_context
    async def not_to_complete_within(
        self,
        time_span: Duration,
        because: str = "",
        *because_args: Any,
    ) -> AndConstraint["AsyncFunctionAssertions"]:
        """Assert the operation does not complete within ``time_span``.

        An operation whose synchronous prefix alone exceeds ``time_span``
        passes without being awaited.
        """
        display = as_timedelta(time_span)
        success = (
            self._assertion()
            .for_condition(self.subject is not None)
            .because_of(because, *because_args)
            .fail_with(
                "Did not expect {context:task} to complete within {0}{reason}, but found <None>.",
                display,
            )
        )

        if success:
            invocation = invoke_with_timer(self.subject, as_seconds(time_span), self.clock)

            if invocation.budget.exhausted:
                observe_in_background(invocation.handle)
            else:
                completed = await completes_within_timeout(
                    invocation.handle,
                    invocation.budget.remaining,
                    self.clock,
                )
                (
                    self._assertion()
                    .for_condition(not completed)
                    .because_of(because, *because_args)
                    .fail_with(
                        "Did not expect {context:task} to complete within {0}{reason}.",
                        display,
                    )
                )

        return AndConstraint(self)

    @_in_log_context
    async def to_throw_exactly(
        self,
        exception_type: type[E],
        because: str = "",
        *because_args: Any,
    ) -> ExceptionAssertions[E]:
        """Assert the operation raises exactly ``exception_type``.

        Subclasses of ``exception_type`` do not satisfy this assertion.
        """
        success = (
            self._assertion()
            .for_condition(self.subject is not None)
            .because_of(because, *because_args)
            .fail_with(
                "Expected {context} to throw exactly {0}{reason}, but found <None>.",
                exception_type,
            )
        )

        if not success:
            return ExceptionAssertions([])

        exception = await self._interceptor.intercept(self.subject)
        (
            self._assertion()
            .for_condition(exception is not None)
            .because_of(because, *because_args)
            .fail_with("Expected {0}{reason}, but no exception was thrown.", exception_type)
            .then.for_condition(type(exception) is exception_type)
            .fail_with(
                "Expected type to be {0}{reason}, but found {1}.",
                exception_type,
                type(exception),
            )
        )

        if type(exception) is exception_type:
            return ExceptionAssertions([exception])
        return ExceptionAssertions([])

    @_in_log_context
    async def to_throw(
        self,
        exception_type: type[E],
        because: str = "",
        *because_args: Any,
    ) -> ExceptionAssertions[E]:
        """Assert the operation raises ``exception_type`` or a subclass of it."""
        success = (
            self._assertion()
            .for_condition(self.subject is not None)
            .because_of(because, *because_args)
            .fail_with("Expected {context} to throw {0}{reason}, but found <None>.", exception_type)
        )

        if not success:
            return ExceptionAssertions([])

        exception = await self._interceptor.intercept(self.subject)
        return self._throw_internal(exception, exception_type, because, because_args)

    @_in_log_context
    async def to_throw_within(
        self,
        exception_type: type[E],
        time_span: Duration,
        because: str = "",
        *because_args: Any,
    ) -> ExceptionAssertions[E]:
        """Assert the operation raises ``exception_type`` within ``time_span``."""
        display = as_timedelta(time_span)
        success = (
            self._assertion()
            .for_condition(self.subject is not None)
            .because_of(because, *because_args)
            .fail_with(
                "Expected {context} to throw {0} within {1}{reason}, but found <None>.",
                exception_type,
                display,
            )
        )

        if not success:
            return ExceptionAssertions([])

        exception = await self._interceptor.intercept_within(
            self.subject,
            as_seconds(time_span),
        )
        return self._assert_throws(exception, exception_type, display, because, because_args)

    def _throw_internal(
        self,
        exception: BaseException | None,
        exception_type: type[E],
        because: str,
        because_args: tuple[Any, ...],
    ) -> ExceptionAssertions[E]:
        expected = self.extractor.of_type(exception, exception_type)
        (
            self._assertion()
            .because_of(because, *because_args)
            .with_expectation("Expected a <{0}> to be thrown{reason}, ", exception_type)
            .for_condition(exception is not None)
            .fail_with("but no exception was thrown.")
            .then.for_condition(bool(expected))
            .fail_with("but found <{0}>: {1}.", type(exception), exception)
            .then.clear_expectation()
        )
        return ExceptionAssertions(expected)

    def _assert_throws(
        self,
        exception: BaseException | None,
        exception_type: type[E],
        display: Any,
        because: str,
        because_args: tuple[Any, ...],
    ) -> ExceptionAssertions[E]:
        expected = self.extractor.of_type(exception, exception_type)
        (
            self._assertion()
            .because_of(because, *because_args)
            .with_expectation(
                "Expected a <{0}> to be thrown within {1}{reason}, ",
                exception_type,
                display,
            )
            .for_condition(exception is not None)
            .fail_with("but no exception was thrown.")
            .then.for_condition(bool(expected))
            .fail_with("but found <{0}>: {1}.", type(exception), exception)
            .then.clear_expectation()
        )
        return ExceptionAssertions(expected)

    @_in_log_context
    async def not_to_throw(
        self,
        exception_type: type[BaseException] | str | None = None,
        because: str = "",
        *because_args: Any,
    ) -> AndConstraint["AsyncFunctionAssertions"]:
        """Assert the operation raises nothing (or nothing of ``exception_type``).

        The unexpected exception is described in the failure message rather
        than re-raised. Without an exception type the reason may come first:
        ``not_to_throw("because {0} is cached", key)``.

        Raises
        ------
        TypeError
            If ``exception_type`` is neither an exception class nor a reason
        """
        if isinstance(exception_type, str):
            because_args = (because, *because_args) if because else because_args
            exception_type, because = None, exception_type
        elif exception_type is not None and not (
            isinstance(exception_type, type) and issubclass(exception_type, BaseException)
        ):
            msg = f"Expected an exception type, but got {exception_type!r}"
            raise TypeError(msg)

        success = (
            self._assertion()
            .for_condition(self.subject is not None)
            .because_of(because, *because_args)
            .fail_with("Expected {context} not to throw{reason}, but found <None>.")
        )

        if success:
            try:
                await require_awaitable(self.subject())
            except NonAwaitableSubjectError:
                raise
            except Exception as e:
                self._not_throw_internal(e, exception_type, because, because_args)

        return AndConstraint(self)

    def _not_throw_internal(
        self,
        exception: Exception,
        exception_type: type[BaseException] | None,
        because: str,
        because_args: tuple[Any, ...],
    ) -> None:
        if exception_type is None:
            (
                self._assertion()
                .because_of(because, *because_args)
                .fail_with("Did not expect any exception{reason}, but found {0}.", exception)
            )
            return

        (
            self._assertion()
            .for_condition(not self.extractor.of_type(exception, exception_type))
            .because_of(because, *because_args)
            .fail_with("Did not expect {0}{reason}, but found {1}.", exception_type, exception)
        )

    def not_to_throw_after(
        self,
        wait_time: Duration,
        poll_interval: Duration,
        because: str = "",
        *because_args: Any,
    ) -> Awaitable[AndConstraint["AsyncFunctionAssertions"]]:
        """Assert the operation stops raising within ``wait_time``.

        The operation is invoked; while it raises, it is invoked again every
        ``poll_interval`` until it succeeds or ``wait_time`` has elapsed.

        Argument checks happen when this method is called, before anything
        is awaited.

        Raises
        ------
        ArgumentOutOfRangeError
            If ``wait_time`` or ``poll_interval`` is negative
        """
        throw_if_argument_is_negative(wait_time, "wait_time")
        throw_if_argument_is_negative(poll_interval, "poll_interval")

        success = (
            self._assertion()
            .for_condition(self.subject is not None)
            .because_of(because, *because_args)
            .fail_with(
                "Expected {context} not to throw any exceptions after {0}{reason}, "
                "but found <None>.",
                as_timedelta(wait_time),
            )
        )

        if success:
            return self._poll_until_not_throwing(
                as_seconds(wait_time),
                as_seconds(poll_interval),
                as_timedelta(wait_time),
                because,
                because_args,
            )
        return _resolved(AndConstraint(self))

    async def _poll_until_not_throwing(
        self,
        wait_time: float,
        poll_interval: float,
        display: Any,
        because: str,
        because_args: tuple[Any, ...],
    ) -> AndConstraint["AsyncFunctionAssertions"]:
        with log_context(assertion="not_to_throw_after"):
            exception = await self._last_exception_after(wait_time, poll_interval)

        if exception is not None:
            (
                self._assertion()
                .because_of(because, *because_args)
                .fail_with(
                    "Did not expect any exceptions after {0}{reason}, but found {1}.",
                    display,
                    exception,
                )
            )
        return AndConstraint(self)

    async def _last_exception_after(
        self,
        wait_time: float,
        poll_interval: float,
    ) -> Exception | None:
        """Invoke the subject until it stops throwing or ``wait_time`` elapses.

        The elapsed time is sampled after each delay, so the subject is
        invoked at least once and never after the wait time has passed.
        """
        invocation_end_time: float | None = None
        exception: Exception | None = None
        attempts = 0
        timer = self.clock.start_timer()

        while invocation_end_time is None or invocation_end_time < wait_time:
            exception = await self._interceptor.intercept(self.subject)
            attempts += 1

            if exception is None:
                logger.debug("Operation stopped throwing", extra={"attempts": attempts})
                return None

            logger.debug(
                "Operation still throwing",
                extra={"attempts": attempts, "exception_type": type(exception).__name__},
            )
            await self.clock.delay(poll_interval)
            invocation_end_time = timer.elapsed

        return exception
