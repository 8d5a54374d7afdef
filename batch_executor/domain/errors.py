"""Errors raised by the batch executor."""

from __future__ import annotations


class TaskFailureError(Exception):
    """Base error for failures the executor raises on behalf of a task.

    Exceptions raised by the tasks themselves are passed through unchanged;
    this type only covers failures detected by the executor.

    Attributes:
        index: Position of the task in the input sequence
    """

    def __init__(self, message: str, index: int) -> None:
        super().__init__(message)
        self.index = index


class TaskTimeoutError(TaskFailureError, TimeoutError):
    """Raised when a task does not settle before the batch deadline.

    Attributes:
        index: Position of the task in the input sequence
        timeout_ms: Configured deadline in milliseconds
        elapsed_ms: Time actually waited before giving up, in milliseconds
    """

    def __init__(self, index: int, timeout_ms: float, elapsed_ms: float) -> None:
        super().__init__(
            f"Task {index} timed out after {elapsed_ms:.0f}ms (limit {timeout_ms:g}ms)",
            index,
        )
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms
