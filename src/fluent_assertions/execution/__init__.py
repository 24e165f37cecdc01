"""Failure reporting: assertion chains, scopes and message formatting."""

from .assertion_chain import AssertionChain, Continuation, Execute
from .assertion_scope import AssertionScope, report_failure
from .caller_identifier import (
    IdentityOverride,
    determine_caller_identity,
    is_override_active,
    override_stack_search_using_current_scope,
    scoped_identity_override,
)
from .message_formatter import format_message
from .reason import format_reason
from .value_formatter import format_value

__all__ = [
    "AssertionChain",
    "AssertionScope",
    "Continuation",
    "Execute",
    "IdentityOverride",
    "determine_caller_identity",
    "format_message",
    "format_reason",
    "format_value",
    "is_override_active",
    "override_stack_search_using_current_scope",
    "report_failure",
    "scoped_identity_override",
]
