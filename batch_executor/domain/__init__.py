"""Batch executor domain models."""

from batch_executor.domain.batch_options import DEFAULT_MAX_CONCURRENCY, BatchOptions, ErrorHandler
from batch_executor.domain.batch_result import BatchResult
from batch_executor.domain.errors import TaskFailureError, TaskTimeoutError
from batch_executor.domain.task_outcome import TaskOutcome
from batch_executor.domain.task_status import TaskStatus

__all__ = [
    "DEFAULT_MAX_CONCURRENCY",
    "BatchOptions",
    "BatchResult",
    "ErrorHandler",
    "TaskFailureError",
    "TaskOutcome",
    "TaskStatus",
    "TaskTimeoutError",
]
