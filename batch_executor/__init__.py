"""Bounded-concurrency batch execution of async tasks."""

from batch_executor.domain import (
    BatchOptions,
    BatchResult,
    TaskFailureError,
    TaskOutcome,
    TaskStatus,
    TaskTimeoutError,
)
from batch_executor.infrastructure import BatchExecutor, execute

__all__ = [
    "BatchExecutor",
    "BatchOptions",
    "BatchResult",
    "TaskFailureError",
    "TaskOutcome",
    "TaskStatus",
    "TaskTimeoutError",
    "execute",
]
