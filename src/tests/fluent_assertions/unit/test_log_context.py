"""Tests for the log context set while assertions run."""

import pytest

from fluent_assertions import expect
from fluent_logging import get_log_context
from tests._helpers import FakeClock


class TestAssertionLogContext:
    """Test assertions tag their work with the assertion name."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("name", "run"),
        [
            ("to_complete_within", lambda a: a.to_complete_within(1)),
            ("not_to_throw", lambda a: a.not_to_throw()),
            ("to_throw_within", lambda a: a.to_throw_within(KeyError, 1)),
            ("not_to_throw_after", lambda a: a.not_to_throw_after(1, 0.1)),
        ],
        ids=["to_complete_within", "not_to_throw", "to_throw_within", "not_to_throw_after"],
    )
    async def test_subject_sees_assertion_name(
        self,
        auto_clock: FakeClock,
        name: str,
        run,
    ) -> None:
        """Test the subject runs with the assertion name in the log context."""
        seen: list[dict] = []

        async def subject() -> None:
            seen.append(get_log_context())
            if name == "to_throw_within":
                raise KeyError("k")

        await run(expect(subject, clock=auto_clock))

        assert seen == [{"assertion": name}]
        assert get_log_context() == {}

    @pytest.mark.asyncio
    async def test_context_cleared_after_failure(self) -> None:
        """Test the log context is restored when the assertion fails."""
        with pytest.raises(AssertionError):
            await expect(lambda: _raise()).not_to_throw()

        assert get_log_context() == {}


async def _raise() -> None:
    raise RuntimeError("boom")
