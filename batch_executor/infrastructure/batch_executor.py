"""Bounded-concurrency batch execution on the asyncio event loop."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from batch_executor.domain.batch_options import DEFAULT_MAX_CONCURRENCY, BatchOptions, ErrorHandler
from batch_executor.domain.batch_result import BatchResult
from batch_executor.domain.task_outcome import TaskOutcome
from batch_executor.domain.task_status import TaskStatus
from batch_executor.infrastructure.timeout import run_with_timeout

T = TypeVar("T")

Task = Callable[[], Awaitable[T]]

logger = logging.getLogger(__name__)


@dataclass
class _BatchState(Generic[T]):
    """Shared state for the workers of a single batch run.

    There is no await between reading and advancing the cursor, so on a
    single event loop each index is claimed by exactly one worker.
    """

    size: int
    cursor: int = 0
    outcomes: list[TaskOutcome[T]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.outcomes = [
            TaskOutcome(index=index, status=TaskStatus.PENDING) for index in range(self.size)
        ]

    def claim(self) -> int | None:
        """Claim the next unclaimed index, or None when all are taken."""
        if self.cursor >= self.size:
            return None
        index = self.cursor
        self.cursor += 1
        return index


class BatchExecutor:
    """Run independent async tasks with a bounded worker pool.

    A fixed number of workers pull indices from a shared cursor, so fast
    tasks let a worker move on while slow ones only occupy their own worker.
    Results are reported in input order, not completion order.

    Failure handling follows ``BatchOptions.on_error``: when a handler is
    set, every failed or timed-out task is reported to it and its slot is
    left as None. Without one the first failure propagates out of
    ``execute``; only the failing worker stops, the others are not cancelled.

    Example:
        executor = BatchExecutor(BatchOptions(max_concurrency=3, max_timeout=500))
        results = await executor.execute([lambda: fetch(url) for url in urls])
    """

    def __init__(self, options: BatchOptions | None = None) -> None:
        """Initialize the executor.

        Args:
            options: Batch options (defaults to ``BatchOptions()``)
        """
        self.options = options or BatchOptions()

    async def execute(self, tasks: Sequence[Task[T]], **overrides: Any) -> list[T | None]:
        """Execute tasks and return their values in input order.

        Args:
            tasks: Zero-argument callables returning awaitables
            **overrides: BatchOptions fields to override for this call

        Returns:
            One entry per task: the resolved value, or None if the task
            failed and an error handler was configured

        Raises:
            Exception: The first task failure when no error handler is set
        """
        result = await self.execute_detailed(tasks, **overrides)
        return result.values

    async def execute_detailed(self, tasks: Sequence[Task[T]], **overrides: Any) -> BatchResult[T]:
        """Execute tasks and return the full outcome of every task.

        Args:
            tasks: Zero-argument callables returning awaitables
            **overrides: BatchOptions fields to override for this call

        Returns:
            BatchResult with one TaskOutcome per task, in input order

        Raises:
            Exception: The first task failure when no error handler is set
        """
        options = self.options.merged(**overrides)
        task_list = list(tasks)
        start_time = time.monotonic()

        worker_count = min(options.max_concurrency, len(task_list))
        metadata = {
            "worker_count": worker_count,
            "max_concurrency": options.max_concurrency,
            "max_timeout": options.max_timeout,
        }
        if not task_list:
            return BatchResult(outcomes=[], metadata=metadata)

        state: _BatchState[T] = _BatchState(size=len(task_list))
        logger.debug(
            f"Starting batch of {len(task_list)} tasks with {worker_count} workers "
            f"(timeout={options.max_timeout}ms)"
        )

        workers = [
            asyncio.create_task(self._worker_loop(worker_id, task_list, state, options))
            for worker_id in range(worker_count)
        ]
        await asyncio.gather(*workers)

        result = BatchResult(
            outcomes=state.outcomes,
            total_execution_time=time.monotonic() - start_time,
            metadata=metadata,
        )
        logger.debug(
            f"Batch {result.batch_id} finished: {len(result.succeeded)} succeeded, "
            f"{len(result.failed)} failed in {result.total_execution_time:.3f}s"
        )
        return result

    async def _worker_loop(
        self,
        worker_id: int,
        tasks: list[Task[T]],
        state: _BatchState[T],
        options: BatchOptions,
    ) -> None:
        while True:
            index = state.claim()
            if index is None:
                break

            outcome = await self._run_task(tasks[index], index, options)
            state.outcomes[index] = outcome

            if outcome.status.is_successful():
                continue

            error = outcome.error
            assert error is not None
            if options.on_error is None:
                logger.error(f"Task {index} failed on worker {worker_id}, aborting batch: {error!r}")
                raise error

            logger.warning(f"Task {index} failed ({outcome.status.name}): {error!r}")
            options.on_error(error, index)

        logger.debug(f"Worker {worker_id} found no more tasks")

    async def _run_task(self, task: Task[T], index: int, options: BatchOptions) -> TaskOutcome[T]:
        start_time = time.monotonic()
        try:
            result = task()
            if inspect.isawaitable(result):
                result = await run_with_timeout(
                    result,
                    options.max_timeout,
                    index,
                    cancel_on_timeout=options.cancel_on_timeout,
                )
        except Exception as error:
            return TaskOutcome.failure(index, error, time.monotonic() - start_time)

        return TaskOutcome.success(index, result, time.monotonic() - start_time)


async def execute(
    tasks: Sequence[Task[T]],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    max_timeout: float | None = None,
    on_error: ErrorHandler | None = None,
    cancel_on_timeout: bool = False,
) -> list[T | None]:
    """Execute tasks with bounded concurrency and return values in input order.

    Args:
        tasks: Zero-argument callables returning awaitables
        max_concurrency: Maximum number of tasks in flight at once
        max_timeout: Per-task deadline in milliseconds (None for no timeout)
        on_error: Called with (error, index) for each failed task
        cancel_on_timeout: Cancel tasks that miss the deadline

    Returns:
        One entry per task: the resolved value, or None for failed tasks
    """
    options = BatchOptions(
        max_concurrency=max_concurrency,
        max_timeout=max_timeout,
        on_error=on_error,
        cancel_on_timeout=cancel_on_timeout,
    )
    return await BatchExecutor(options).execute(tasks)
