"""Task outcome status enumeration."""

from enum import StrEnum, auto


class TaskStatus(StrEnum):
    """Represents the outcome of a single task in a batch.

    Attributes:
        PENDING: Task has not been claimed by a worker yet
        SUCCESS: Task settled with a value
        FAILED: Task raised an error
        TIMEOUT: Task did not settle before the configured deadline
    """

    PENDING = auto()
    SUCCESS = auto()
    FAILED = auto()
    TIMEOUT = auto()

    def is_terminal(self) -> bool:
        """Check if this status is terminal (the task has settled).

        Returns:
            True if status is SUCCESS, FAILED, or TIMEOUT
        """
        return self in (TaskStatus.SUCCESS, TaskStatus.FAILED, TaskStatus.TIMEOUT)

    def is_successful(self) -> bool:
        """Check if this status indicates successful execution.

        Returns:
            True only if status is SUCCESS
        """
        return self == TaskStatus.SUCCESS
