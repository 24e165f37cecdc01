"""Invoke a deferred operation and capture, rather than propagate, its exception."""

import inspect

from fluent_assertions.common.clock import IClock
from fluent_assertions.errors import NonAwaitableSubjectError
from fluent_assertions.execution.caller_identifier import scoped_identity_override
from fluent_logging import get_logger

from .invocation import DeferredOperation, invoke_with_timer, require_awaitable
from .outcome import Faulted
from .race import observe_in_background, race

logger = get_logger(__name__)


class ExceptionInterceptor:
    """Run subjects under an identity override and hand back what they raised.

    Only :class:`Exception` subclasses are intercepted. Cancellation and
    interpreter exits propagate, as does a subject returning a non-awaitable.
    """

    def __init__(self, clock: IClock) -> None:
        self.clock = clock

    async def intercept(self, subject: DeferredOperation) -> Exception | None:
        """Await ``subject`` and return the exception it raised, if any."""
        try:
            # Assertions failing inside the subject must name the subject's
            # own expression rather than the caller of this method.
            with scoped_identity_override(inspect.currentframe()):
                await require_awaitable(subject())
        except NonAwaitableSubjectError:
            raise
        except Exception as e:
            logger.debug(
                "Intercepted exception",
                extra={"exception_type": type(e).__name__},
            )
            return e
        return None

    async def intercept_within(
        self,
        subject: DeferredOperation,
        timeout: float,
    ) -> Exception | None:
        """Return the exception ``subject`` raised within ``timeout`` seconds.

        Returns ``None`` when nothing was raised in time, including when the
        synchronous prefix alone used up the budget; that timing failure is
        reported separately by the caller. Synchronous and asynchronous faults
        are indistinguishable in the result.
        """
        with scoped_identity_override(inspect.currentframe()):
            invocation = invoke_with_timer(subject, timeout, self.clock)
            if invocation.budget.exhausted:
                logger.debug(
                    "Budget exhausted by synchronous prefix",
                    extra={"remaining_s": invocation.budget.remaining},
                )
                observe_in_background(invocation.handle)
                return None

            outcome = await race(
                invocation.handle,
                invocation.budget.remaining,
                self.clock,
            )

        if not isinstance(outcome, Faulted):
            return None
        if not isinstance(outcome.exception, Exception):
            raise outcome.exception

        logger.debug(
            "Intercepted exception within budget",
            extra={"exception_type": type(outcome.exception).__name__},
        )
        return outcome.exception
