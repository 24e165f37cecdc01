"""Tests for invoking deferred operations and timing their synchronous prefix."""

import asyncio

import pytest

from fluent_assertions.errors import NonAwaitableSubjectError
from fluent_assertions.specialized.invocation import (
    TimeBudget,
    faulted_handle,
    invoke,
    invoke_with_timer,
    require_awaitable,
)
from tests._helpers import CountingSubject, FakeClock, SyncRaisingSubject, with_sync_prefix


class TestTimeBudget:
    """Test TimeBudget arithmetic."""

    def test_remaining_subtracts_elapsed(self) -> None:
        """Test remaining is total minus elapsed."""
        budget = TimeBudget(total=1.0, elapsed=0.25)

        assert budget.remaining == 0.75
        assert not budget.exhausted

    def test_exactly_used_budget_is_not_exhausted(self) -> None:
        """Test a budget used up to the last instant is not exhausted."""
        budget = TimeBudget(total=0.5, elapsed=0.5)

        assert budget.remaining == 0
        assert not budget.exhausted

    def test_overrun_budget_is_exhausted(self) -> None:
        """Test a negative remainder marks the budget exhausted."""
        budget = TimeBudget(total=0.5, elapsed=0.75)

        assert budget.remaining == -0.25
        assert budget.exhausted


class TestRequireAwaitable:
    """Test the awaitable check on subject results."""

    @pytest.mark.asyncio
    async def test_returns_future_unchanged(self) -> None:
        """Test an awaitable result is passed through."""
        future = asyncio.get_running_loop().create_future()

        assert require_awaitable(future) is future

    @pytest.mark.parametrize("result", [None, 42, "text", [1, 2]])
    def test_rejects_plain_values(self, result: object) -> None:
        """Test non-awaitable results raise NonAwaitableSubjectError."""
        with pytest.raises(NonAwaitableSubjectError, match="returned"):
            require_awaitable(result)

    def test_error_is_a_type_error(self) -> None:
        """Test callers catching TypeError also see the error."""
        with pytest.raises(TypeError):
            require_awaitable(1)


class TestInvoke:
    """Test invoke()."""

    @pytest.mark.asyncio
    async def test_invokes_subject_exactly_once(self) -> None:
        """Test the subject is called once and its result surfaces on the handle."""
        subject = CountingSubject(result="done")

        handle = invoke(subject)

        assert await handle == "done"
        assert subject.invocations == 1

    @pytest.mark.asyncio
    async def test_synchronous_raise_becomes_faulted_handle(self) -> None:
        """Test a raise before the awaitable exists yields a faulted handle."""
        error = ValueError("rejected up front")
        subject = SyncRaisingSubject(error)

        handle = invoke(subject)

        assert handle.done()
        assert handle.exception() is error
        assert subject.invocations == 1

    @pytest.mark.asyncio
    async def test_non_awaitable_result_raises(self) -> None:
        """Test a subject returning a plain value is a usage error."""
        with pytest.raises(NonAwaitableSubjectError):
            invoke(lambda: 42)

    @pytest.mark.asyncio
    async def test_faulted_handle_keeps_exception_identity(self) -> None:
        """Test faulted_handle carries the original exception object."""
        error = KeyError("k")

        handle = faulted_handle(error)

        with pytest.raises(KeyError) as exc_info:
            await handle
        assert exc_info.value is error


class TestInvokeWithTimer:
    """Test invoke_with_timer()."""

    @pytest.mark.asyncio
    async def test_quick_prefix_keeps_full_budget(self, fake_clock: FakeClock) -> None:
        """Test a subject with an instant synchronous part keeps its budget."""
        subject = CountingSubject()

        invocation = invoke_with_timer(subject, 0.5, fake_clock)
        await invocation.handle

        assert invocation.budget.total == 0.5
        assert invocation.budget.elapsed == 0
        assert invocation.budget.remaining == 0.5

    @pytest.mark.asyncio
    async def test_slow_prefix_is_charged_against_budget(self, fake_clock: FakeClock) -> None:
        """Test time spent before the awaitable is returned reduces the budget."""
        subject = with_sync_prefix(fake_clock, 0.75, CountingSubject())

        invocation = invoke_with_timer(subject, 0.5, fake_clock)
        await invocation.handle

        assert invocation.budget.elapsed == 0.75
        assert invocation.budget.remaining == -0.25
        assert invocation.budget.exhausted

    @pytest.mark.asyncio
    async def test_logs_invocation(self, fake_clock: FakeClock, debug_logs) -> None:
        """Test the invocation is logged with its budget."""
        invocation = invoke_with_timer(CountingSubject(), 0.5, fake_clock)
        await invocation.handle

        records = [r for r in debug_logs.records if r.getMessage() == "Invoked deferred operation"]
        assert len(records) == 1
        assert records[0].budget_total_s == 0.5
