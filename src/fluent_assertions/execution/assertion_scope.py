"""Scopes that collect assertion failures instead of raising on the first one."""

from contextvars import ContextVar, Token
from types import TracebackType

from fluent_assertions.errors import AssertionFailedError
from fluent_logging import get_logger

logger = get_logger(__name__)

_current_scope: ContextVar["AssertionScope | None"] = ContextVar(
    "fluent_assertion_scope",
    default=None,
)


class AssertionScope:
    """Collect failures raised inside a ``with`` block.

    Outside any scope a failing assertion raises :class:`AssertionFailedError`
    immediately. Inside a scope failures are recorded and raised together when
    the outermost scope exits; nested scopes hand their failures to the parent.
    When the block itself raises, that exception propagates with the collected
    failures attached as notes.

    Parameters
    ----------
    context : str, optional
        Name substituted for ``{context}`` placeholders, overriding caller
        identification
    """

    def __init__(self, context: str | None = None) -> None:
        self._context = context
        self._failures: list[str] = []
        self._parent: AssertionScope | None = None
        self._token: Token[AssertionScope | None] | None = None

    @staticmethod
    def current() -> "AssertionScope | None":
        """Return the innermost active scope, if any."""
        return _current_scope.get()

    @property
    def context(self) -> str | None:
        """Name of the subject, inherited from enclosing scopes when unset."""
        if self._context is not None:
            return self._context
        return self._parent.context if self._parent is not None else None

    @property
    def failures(self) -> list[str]:
        """Failure messages recorded so far."""
        return list(self._failures)

    @property
    def has_failures(self) -> bool:
        return bool(self._failures)

    def fail(self, message: str) -> None:
        """Record a failure message."""
        logger.debug("Assertion failed inside scope", extra={"failure": message})
        self._failures.append(message)

    def discard(self) -> list[str]:
        """Drop and return the failures recorded so far."""
        failures, self._failures = self._failures, []
        return failures

    def __enter__(self) -> "AssertionScope":
        self._parent = _current_scope.get()
        self._token = _current_scope.set(self)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _current_scope.reset(self._token)
            self._token = None

        failures = self.discard()
        if not failures:
            return
        if self._parent is not None:
            for failure in failures:
                self._parent.fail(failure)
            return
        if exc is None:
            raise AssertionFailedError("\n".join(failures))
        exc.add_note("Assertion failures collected before this exception:")
        for failure in failures:
            exc.add_note(failure)


def report_failure(message: str) -> None:
    """Send a failure to the active scope, or raise when there is none."""
    scope = AssertionScope.current()
    if scope is not None:
        scope.fail(message)
        return
    raise AssertionFailedError(message)
