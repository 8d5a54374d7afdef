"""Per-task outcome model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from batch_executor.domain.errors import TaskTimeoutError
from batch_executor.domain.task_status import TaskStatus

T = TypeVar("T")


@dataclass
class TaskOutcome(Generic[T]):
    """Tagged result of one task in a batch.

    Workers build one of these for every settled task before writing the
    result slot. Callers of ``execute`` only see ``value`` (or ``None``);
    the full outcome is exposed through ``BatchResult``.

    Attributes:
        index: Position of the task in the input sequence
        status: Settled status (SUCCESS, FAILED or TIMEOUT)
        value: Resolved value (None unless status is SUCCESS)
        error: Exception that caused the failure (None if successful)
        execution_time: Time between invoking the task and settling, in seconds
    """

    index: int
    status: TaskStatus
    value: T | None = None
    error: BaseException | None = None
    execution_time: float = 0.0

    def __post_init__(self) -> None:
        """Validate the task outcome."""
        if self.index < 0:
            raise ValueError("index must be non-negative")
        if self.execution_time < 0:
            raise ValueError("execution_time must be non-negative")
        if self.status.is_successful():
            if self.error is not None:
                raise ValueError("error must be None for successful outcomes")
        elif self.value is not None:
            raise ValueError("value must be None for unsuccessful outcomes")

    @property
    def error_type(self) -> str | None:
        """Name of the error type, if any."""
        return type(self.error).__name__ if self.error is not None else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary containing all outcome information
        """
        return {
            "index": self.index,
            "status": self.status.name,
            "value": self.value,
            "error_message": str(self.error) if self.error is not None else None,
            "error_type": self.error_type,
            "execution_time": self.execution_time,
        }

    @classmethod
    def success(cls, index: int, value: T, execution_time: float) -> TaskOutcome[T]:
        """Create a successful outcome.

        Args:
            index: Task index
            value: Value the task resolved to
            execution_time: Execution time in seconds

        Returns:
            TaskOutcome with SUCCESS status
        """
        return cls(
            index=index,
            status=TaskStatus.SUCCESS,
            value=value,
            execution_time=execution_time,
        )

    @classmethod
    def failure(
        cls, index: int, error: BaseException, execution_time: float
    ) -> TaskOutcome[T]:
        """Create a failed outcome.

        Timeout errors are recorded with TIMEOUT status, everything else
        with FAILED.

        Args:
            index: Task index
            error: Exception that caused the failure
            execution_time: Execution time in seconds

        Returns:
            TaskOutcome with FAILED or TIMEOUT status
        """
        status = TaskStatus.TIMEOUT if isinstance(error, TaskTimeoutError) else TaskStatus.FAILED
        return cls(
            index=index,
            status=status,
            error=error,
            execution_time=execution_time,
        )
