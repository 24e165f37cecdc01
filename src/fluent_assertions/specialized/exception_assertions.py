"""Assertions on the exception(s) captured by a throw-assertion."""

import re
from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from fluent_assertions.execution import Execute

E = TypeVar("E", bound=BaseException)


def _wildcard_pattern(pattern: str) -> re.Pattern[str]:
    # Only * and ? are wildcards; everything else matches literally
    escaped = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(f"^{escaped}$", re.DOTALL)


def _inner_exception(exception: BaseException) -> BaseException | None:
    return exception.__cause__ or exception.__context__


class ExceptionAssertions(Generic[E]):
    """Fluent checks on thrown exceptions.

    Parameters
    ----------
    exceptions : Sequence[BaseException]
        The exceptions that matched the expected type. Empty when the
        throw-assertion already failed inside an :class:`AssertionScope`, in
        which case the checks below report "no exception" failures.
    """

    def __init__(self, exceptions: Sequence[E]) -> None:
        self.subject: list[E] = list(exceptions)

    @property
    def which(self) -> E | None:
        """The single thrown exception, for direct inspection."""
        return self._single()

    @property
    def and_(self) -> E | None:
        return self._single()

    def _single(self) -> E | None:
        if len(self.subject) > 1:
            types = ", ".join(type(e).__name__ for e in self.subject)
            Execute.assertion().fail_with(
                "More than one exception was thrown. {context:exception} "
                f"matches {len(self.subject)} exceptions: {types}.",
            )
            return None
        return self.subject[0] if self.subject else None

    def with_message(
        self,
        expected: str,
        because: str = "",
        *because_args: Any,
    ) -> "ExceptionAssertions[E]":
        """Assert the message matches ``expected`` (``*`` and ``?`` wildcards)."""
        chain = (
            Execute.assertion()
            .because_of(because, *because_args)
            .with_expectation("Expected exception message to match {0}{reason}, ", expected)
            .for_condition(bool(self.subject))
            .fail_with("but no exception was thrown.")
        )
        if chain:
            pattern = _wildcard_pattern(expected)
            for exception in self.subject:
                message = str(exception)
                chain = chain.then.for_condition(pattern.match(message) is not None).fail_with(
                    "but {0} does not match.",
                    message,
                )
        return self

    def with_inner_exception(
        self,
        inner_type: type[BaseException],
        because: str = "",
        *because_args: Any,
    ) -> "ExceptionAssertions[BaseException]":
        """Assert the exception was chained from an instance of ``inner_type``.

        The inner exception is ``__cause__`` (``raise ... from``), falling back
        to the implicit ``__context__``.
        """
        inners = [
            inner
            for inner in (_inner_exception(e) for e in self.subject)
            if inner is not None
        ]
        (
            Execute.assertion()
            .because_of(because, *because_args)
            .with_expectation("Expected inner {0}{reason}, ", inner_type)
            .for_condition(bool(self.subject))
            .fail_with("but no exception was thrown.")
            .then.for_condition(bool(inners))
            .fail_with("but the thrown exception has no inner exception.")
            .then.for_condition(any(isinstance(inner, inner_type) for inner in inners))
            .fail_with("but found {0}.", inners[0] if inners else None)
        )
        return ExceptionAssertions([i for i in inners if isinstance(i, inner_type)])

    def where(
        self,
        predicate: Callable[[E], bool],
        because: str = "",
        *because_args: Any,
    ) -> "ExceptionAssertions[E]":
        """Assert every thrown exception satisfies ``predicate``."""
        description = getattr(predicate, "__qualname__", repr(predicate))
        failing = [e for e in self.subject if not predicate(e)]
        (
            Execute.assertion()
            .because_of(because, *because_args)
            .with_expectation("Expected exception where {0}{reason}, ", description)
            .for_condition(bool(self.subject))
            .fail_with("but no exception was thrown.")
            .then.for_condition(not failing)
            .fail_with("but the condition was not met by {0}.", failing[0] if failing else None)
        )
        return self
