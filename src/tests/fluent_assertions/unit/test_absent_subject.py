"""Tests for assertions on a missing (``None``) subject."""

from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from fluent_assertions import (
    AssertionFailedError,
    AssertionScope,
    AsyncFunctionAssertions,
    expect,
)

Assertion = Callable[[AsyncFunctionAssertions], Awaitable[Any]]

ABSENT_SUBJECT_CASES: list[tuple[str, Assertion, str]] = [
    (
        "to_complete_within",
        lambda a: a.to_complete_within(0.2),
        "Expected task to complete within 200ms, but found <None>.",
    ),
    (
        "not_to_complete_within",
        lambda a: a.not_to_complete_within(0.2),
        "Did not expect task to complete within 200ms, but found <None>.",
    ),
    (
        "to_throw_exactly",
        lambda a: a.to_throw_exactly(ValueError),
        "Expected async function to throw exactly ValueError, but found <None>.",
    ),
    (
        "to_throw",
        lambda a: a.to_throw(ValueError),
        "Expected async function to throw ValueError, but found <None>.",
    ),
    (
        "to_throw_within",
        lambda a: a.to_throw_within(ValueError, 1.5),
        "Expected async function to throw ValueError within 1.5s, but found <None>.",
    ),
    (
        "not_to_throw",
        lambda a: a.not_to_throw(),
        "Expected async function not to throw, but found <None>.",
    ),
    (
        "not_to_throw_after",
        lambda a: a.not_to_throw_after(1, 0.1),
        "Expected async function not to throw any exceptions after 1s, but found <None>.",
    ),
]


@pytest.mark.usefixtures("no_caller_identification")
class TestAbsentSubject:
    """Test every assertion fails for a missing subject."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("assertion", "expected"),
        [(case[1], case[2]) for case in ABSENT_SUBJECT_CASES],
        ids=[case[0] for case in ABSENT_SUBJECT_CASES],
    )
    async def test_fails_with_descriptive_message(
        self,
        assertion: Assertion,
        expected: str,
    ) -> None:
        """Test the failure says the subject was <None>."""
        with pytest.raises(AssertionFailedError) as exc_info:
            await assertion(expect(None))

        assert str(exc_info.value) == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "assertion",
        [case[1] for case in ABSENT_SUBJECT_CASES],
        ids=[case[0] for case in ABSENT_SUBJECT_CASES],
    )
    async def test_reports_single_failure_in_scope(self, assertion: Assertion) -> None:
        """Test only the missing-subject failure is recorded."""
        with AssertionScope() as scope:
            await assertion(expect(None))
            failures = scope.discard()

        assert len(failures) == 1
        assert failures[0].endswith("but found <None>.")

    @pytest.mark.asyncio
    async def test_reason_is_included(self) -> None:
        """Test the because phrase appears before the <None> clause."""
        with pytest.raises(AssertionFailedError) as exc_info:
            await expect(None).to_throw(KeyError, "lookups must fail")

        assert str(exc_info.value) == (
            "Expected async function to throw KeyError because lookups must fail, "
            "but found <None>."
        )


class TestAbsentSubjectNaming:
    """Test the missing subject is named from the call site."""

    @pytest.mark.asyncio
    async def test_names_variable_holding_none(self) -> None:
        """Test the expression passed to expect is used as the context."""
        handler = None

        with pytest.raises(AssertionFailedError) as exc_info:
            await expect(handler).not_to_throw()

        assert str(exc_info.value) == "Expected handler not to throw, but found <None>."
