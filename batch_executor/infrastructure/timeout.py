"""Timeout wrapping for task awaitables."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from batch_executor.domain.errors import TaskTimeoutError

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def run_with_timeout(
    awaitable: Awaitable[T],
    timeout_ms: float | None,
    index: int,
    cancel_on_timeout: bool = False,
) -> T:
    """Await a task's awaitable with an optional deadline.

    The deadline only bounds the waiting side. Unless ``cancel_on_timeout``
    is set, a task that misses the deadline keeps running in the background
    and whatever it eventually produces is discarded.

    Args:
        awaitable: Awaitable returned by invoking the task
        timeout_ms: Deadline in milliseconds (None or 0 for no timeout)
        index: Task index, reported in the timeout error
        cancel_on_timeout: Cancel the underlying task when the deadline passes

    Returns:
        Value the awaitable resolved to

    Raises:
        TaskTimeoutError: If the awaitable does not settle before the deadline
        Exception: Any exception raised by the awaitable
    """
    if not timeout_ms:
        return await awaitable

    future = asyncio.ensure_future(awaitable)
    start_time = time.monotonic()
    try:
        return await asyncio.wait_for(asyncio.shield(future), timeout=timeout_ms / 1000)
    except TimeoutError:
        # A TimeoutError raised by the task itself is its own failure, not ours
        if future.done():
            return future.result()

        elapsed_ms = (time.monotonic() - start_time) * 1000
        if cancel_on_timeout:
            future.cancel()
        else:
            future.add_done_callback(_discard_late_outcome(index))
        raise TaskTimeoutError(index, timeout_ms, elapsed_ms) from None
    except asyncio.CancelledError:
        future.cancel()
        raise


def _discard_late_outcome(index: int) -> Callable[[asyncio.Future[Any]], None]:
    def _callback(future: asyncio.Future[Any]) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.debug(f"Discarding late failure of timed-out task {index}: {error!r}")
        else:
            logger.debug(f"Discarding late result of timed-out task {index}")

    return _callback
