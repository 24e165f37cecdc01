"""Fluent assertions for asynchronous Python code.

Example::

    from fluent_assertions import expect

    await expect(fetch_user).to_complete_within(0.5)
    (await expect(lambda: client.get("/missing")).to_throw(LookupError)).with_message("*404*")
"""

from .and_constraint import AndConstraint
from .errors import (
    ArgumentOutOfRangeError,
    AssertionFailedError,
    FluentAssertionsError,
    NonAwaitableSubjectError,
)
from .execution import AssertionScope, Execute
from .expect import expect, expect_async
from .specialized import (
    AsyncFunctionAssertions,
    ExceptionAssertions,
    ExceptionExtractor,
)

__version__ = "0.1.0"

__all__ = [
    "AndConstraint",
    "ArgumentOutOfRangeError",
    "AssertionFailedError",
    "AssertionScope",
    "AsyncFunctionAssertions",
    "ExceptionAssertions",
    "ExceptionExtractor",
    "Execute",
    "FluentAssertionsError",
    "NonAwaitableSubjectError",
    "expect",
    "expect_async",
]
