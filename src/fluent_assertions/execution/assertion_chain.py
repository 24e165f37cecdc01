"""Fluent builder behind every assertion: condition, reason, message."""

from typing import Any

from fluent_common.config import ConfigManager

from .assertion_scope import AssertionScope, report_failure
from .caller_identifier import determine_caller_identity
from .message_formatter import format_message
from .reason import format_reason


class Continuation:
    """Result of :meth:`AssertionChain.fail_with`.

    Truthy when every check in the chain so far succeeded. ``then`` continues
    the chain; checks after a failure are skipped.
    """

    def __init__(self, chain: "AssertionChain", succeeded: bool) -> None:
        self._chain = chain
        self._succeeded = succeeded

    @property
    def then(self) -> "AssertionChain":
        return self._chain

    def __bool__(self) -> bool:
        return self._succeeded


class AssertionChain:
    """Evaluate one or more conditions and report failures through the sink.

    Parameters
    ----------
    identifier : str
        Name used for ``{context}`` when no explicit fallback is given and the
        caller cannot be identified
    """

    def __init__(self, identifier: str = "object") -> None:
        self._identifier = identifier
        self._reason = ""
        self._expectation = ""
        self._expectation_args: tuple[Any, ...] = ()
        self._condition: bool | None = None
        self._succeeded = True

    @property
    def succeeded(self) -> bool:
        return self._succeeded

    def for_condition(self, condition: bool) -> "AssertionChain":
        """Set the condition checked by the next :meth:`fail_with`."""
        self._condition = bool(condition)
        return self

    def because_of(self, because: str = "", *because_args: Any) -> "AssertionChain":
        """Attach the ``because`` phrase substituted for ``{reason}``."""
        self._reason = format_reason(because, because_args)
        return self

    def with_expectation(self, template: str, *args: Any) -> "AssertionChain":
        """Prefix every following failure message with ``template``."""
        self._expectation = template
        self._expectation_args = args
        return self

    def clear_expectation(self) -> "AssertionChain":
        self._expectation = ""
        self._expectation_args = ()
        return self

    def fail_with(self, template: str, *args: Any) -> Continuation:
        """Report ``template`` unless the condition holds.

        Without a preceding :meth:`for_condition` the failure is unconditional.
        Once a check in the chain failed, later checks are not evaluated.
        """
        if self._succeeded and not self._condition:
            report_failure(self._build_message(template, args))
            self._succeeded = False
        self._condition = None
        return Continuation(self, self._succeeded)

    def _build_message(self, template: str, args: tuple[Any, ...]) -> str:
        message = ""
        if self._expectation:
            message = format_message(
                self._expectation,
                self._expectation_args,
                self._reason,
                self._resolve_context,
                self._identifier,
            )
        return message + format_message(
            template,
            args,
            self._reason,
            self._resolve_context,
            self._identifier,
        )

    def _resolve_context(self, fallback: str) -> str:
        scope = AssertionScope.current()
        if scope is not None and scope.context:
            return scope.context
        if ConfigManager().is_caller_identification_enabled():
            identity = determine_caller_identity()
            if identity:
                return identity
        return fallback


class Execute:
    """Entry point for building assertions."""

    @staticmethod
    def assertion(identifier: str = "object") -> AssertionChain:
        """Start a new assertion chain."""
        return AssertionChain(identifier)
