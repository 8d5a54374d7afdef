"""Aggregated result of a batch run."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from uuid6 import uuid7

from batch_executor.domain.task_outcome import TaskOutcome
from batch_executor.domain.task_status import TaskStatus

T = TypeVar("T")


@dataclass
class BatchResult(Generic[T]):
    """Represents the result of one batch execution.

    Outcomes are stored positionally: ``outcomes[i]`` describes ``tasks[i]``
    regardless of the order in which tasks completed.

    Attributes:
        outcomes: One outcome per task, in input order
        total_execution_time: Wall-clock time for the whole batch in seconds
        batch_id: Unique identifier for this batch run
        metadata: Additional metadata about the run
    """

    outcomes: list[TaskOutcome[T]] = field(default_factory=list)
    total_execution_time: float = 0.0
    batch_id: uuid.UUID = field(default_factory=uuid7)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the batch result."""
        if self.total_execution_time < 0:
            raise ValueError("total_execution_time must be non-negative")
        for position, outcome in enumerate(self.outcomes):
            if outcome.index != position:
                raise ValueError(
                    f"outcome at position {position} has index {outcome.index}"
                )
            if not outcome.status.is_terminal():
                raise ValueError(f"outcome {position} has not settled ({outcome.status.name})")

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def values(self) -> list[T | None]:
        """Resolved values in input order, with None for failed tasks."""
        return [outcome.value for outcome in self.outcomes]

    @property
    def succeeded(self) -> list[int]:
        """Indices of tasks that completed successfully."""
        return [o.index for o in self.outcomes if o.status.is_successful()]

    @property
    def failed(self) -> list[int]:
        """Indices of tasks that failed or timed out."""
        return [o.index for o in self.outcomes if not o.status.is_successful()]

    @property
    def timed_out(self) -> list[int]:
        """Indices of tasks that timed out."""
        return [o.index for o in self.outcomes if o.status == TaskStatus.TIMEOUT]

    @property
    def is_successful(self) -> bool:
        """Check if every task in the batch succeeded.

        Returns:
            True if no task failed or timed out
        """
        return not self.failed

    def get_outcome(self, index: int) -> TaskOutcome[T]:
        """Get the outcome for a task index.

        Args:
            index: Position of the task in the input sequence

        Returns:
            The outcome recorded for that task
        """
        return self.outcomes[index]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary containing all batch result information
        """
        return {
            "batch_id": str(self.batch_id),
            "total": len(self.outcomes),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "total_execution_time": self.total_execution_time,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
            "metadata": self.metadata,
        }
