"""Tests for the timeout wrapper."""

import asyncio
import logging

import pytest

from batch_executor.domain.errors import TaskFailureError, TaskTimeoutError
from batch_executor.infrastructure.timeout import run_with_timeout


class TestRunWithTimeout:
    """Tests for run_with_timeout."""

    async def test_no_timeout_awaits_directly(self) -> None:
        """Test awaiting without a deadline."""
        assert await run_with_timeout(asyncio.sleep(0.01, result="done"), None, 0) == "done"

    async def test_zero_timeout_awaits_directly(self) -> None:
        """Test that a zero deadline means no deadline."""
        assert await run_with_timeout(asyncio.sleep(0.01, result="done"), 0, 0) == "done"

    async def test_completes_within_deadline(self) -> None:
        """Test that a fast awaitable returns its value."""
        assert await run_with_timeout(asyncio.sleep(0.01, result=42), 1000, 0) == 42

    async def test_exceeding_deadline_raises_timeout(self) -> None:
        """Test that a slow awaitable raises TaskTimeoutError with metadata."""
        with pytest.raises(TaskTimeoutError) as exc_info:
            await run_with_timeout(asyncio.sleep(1), 50, index=7, cancel_on_timeout=True)

        error = exc_info.value
        assert error.index == 7
        assert error.timeout_ms == 50
        assert error.elapsed_ms >= 40
        assert "Task 7 timed out" in str(error)
        assert isinstance(error, TaskFailureError)
        assert isinstance(error, TimeoutError)

    async def test_task_errors_propagate(self) -> None:
        """Test that exceptions from the awaitable pass through unchanged."""

        async def broken() -> None:
            raise KeyError("missing")

        with pytest.raises(KeyError, match="missing"):
            await run_with_timeout(broken(), 1000, 0)

    async def test_task_raised_timeout_is_not_wrapped(self) -> None:
        """Test that a TimeoutError raised by the task itself is not reported as ours."""

        async def upstream_timeout() -> None:
            raise TimeoutError("upstream gave up")

        with pytest.raises(TimeoutError, match="upstream gave up") as exc_info:
            await run_with_timeout(upstream_timeout(), 1000, 0)

        assert not isinstance(exc_info.value, TaskTimeoutError)

    async def test_timed_out_task_keeps_running_by_default(self) -> None:
        """Test that the underlying task is abandoned, not cancelled."""
        finished = asyncio.Event()

        async def slow() -> str:
            await asyncio.sleep(0.1)
            finished.set()
            return "late"

        with pytest.raises(TaskTimeoutError):
            await run_with_timeout(slow(), 20, 0)

        await asyncio.wait_for(finished.wait(), timeout=1)
        assert finished.is_set()

    async def test_cancel_on_timeout_cancels_task(self) -> None:
        """Test that cancel_on_timeout stops the underlying task."""
        cancelled = asyncio.Event()

        async def slow() -> None:
            try:
                await asyncio.sleep(1)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        with pytest.raises(TaskTimeoutError):
            await run_with_timeout(slow(), 20, 0, cancel_on_timeout=True)

        await asyncio.wait_for(cancelled.wait(), timeout=1)
        assert cancelled.is_set()

    async def test_late_failure_is_logged_and_discarded(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a failure after the deadline is only logged."""
        caplog.set_level(logging.DEBUG, logger="batch_executor.infrastructure.timeout")

        async def slow_failure() -> None:
            await asyncio.sleep(0.05)
            raise RuntimeError("too late")

        with pytest.raises(TaskTimeoutError):
            await run_with_timeout(slow_failure(), 10, index=3)

        await asyncio.sleep(0.1)
        assert "Discarding late failure of timed-out task 3" in caplog.text
