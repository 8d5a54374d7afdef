"""Batch executor infrastructure."""

from batch_executor.infrastructure.batch_executor import BatchExecutor, Task, execute
from batch_executor.infrastructure.timeout import run_with_timeout

__all__ = ["BatchExecutor", "Task", "execute", "run_with_timeout"]
