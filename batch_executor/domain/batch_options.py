"""Configuration for a batch run."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MAX_CONCURRENCY = 5

ErrorHandler = Callable[[BaseException, int], Any]


class BatchOptions(BaseModel):
    """Options controlling how a batch of tasks is executed."""

    model_config = ConfigDict(frozen=True)

    max_concurrency: int = Field(
        default=DEFAULT_MAX_CONCURRENCY,
        description="Maximum number of tasks in flight at once; values below 1 are clamped to 1",
        examples=[5],
    )
    max_timeout: float | None = Field(
        default=None,
        description="Per-task deadline in milliseconds; None or 0 disables the timeout",
        examples=[50, 1000],
    )
    on_error: ErrorHandler | None = Field(
        default=None,
        description="Called with (error, index) for each failed task; fail-fast when absent",
    )
    cancel_on_timeout: bool = Field(
        default=False,
        description="Cancel the underlying task when it times out instead of abandoning it",
    )

    @field_validator("max_concurrency")
    @classmethod
    def _clamp_concurrency(cls, value: int) -> int:
        return max(1, value)

    @field_validator("max_timeout")
    @classmethod
    def _check_timeout(cls, value: float | None) -> float | None:
        if value is None or value == 0:
            return None
        if value < 0:
            raise ValueError("max_timeout must be positive")
        return value

    def merged(self, **overrides: Any) -> BatchOptions:
        """Return a validated copy with the given fields replaced.

        Every key passed is applied, including None, so ``on_error=None``
        restores fail-fast and ``max_timeout=None`` disables the deadline.

        Args:
            **overrides: Field values to replace

        Returns:
            New BatchOptions instance, or self when nothing is overridden

        Raises:
            ValueError: If an override names an unknown option
        """
        if not overrides:
            return self
        fields = type(self).model_fields
        unknown = sorted(set(overrides) - set(fields))
        if unknown:
            raise ValueError(f"Unknown batch options: {', '.join(unknown)}")
        current = {name: getattr(self, name) for name in fields}
        return BatchOptions.model_validate({**current, **overrides})
