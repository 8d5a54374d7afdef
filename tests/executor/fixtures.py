"""Test fixtures for batch executor tests."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any


class ConcurrencyProbe:
    """Builds instrumented tasks that track how many are in flight."""

    def __init__(self) -> None:
        """Initialize counters."""
        self.in_flight = 0
        self.max_in_flight = 0
        self.started: list[int] = []
        self.completed: list[int] = []

    def task(
        self, index: int, value: Any, delay: float = 0.01, error: Exception | None = None
    ) -> Callable[[], Awaitable[Any]]:
        """Create a task that sleeps, then returns ``value`` or raises ``error``.

        Args:
            index: Identifier recorded in ``started`` and ``completed``
            value: Value to return
            delay: Seconds to sleep before settling
            error: Exception to raise instead of returning

        Returns:
            Zero-argument callable producing a coroutine
        """

        async def _run() -> Any:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            self.started.append(index)
            try:
                await asyncio.sleep(delay)
                if error is not None:
                    raise error
                return value
            finally:
                self.in_flight -= 1
                self.completed.append(index)

        return _run


def delayed(value: Any, delay: float) -> Callable[[], Awaitable[Any]]:
    """Create a task resolving to ``value`` after ``delay`` seconds."""

    async def _run() -> Any:
        await asyncio.sleep(delay)
        return value

    return _run


def failing(error: Exception, delay: float = 0.0) -> Callable[[], Awaitable[Any]]:
    """Create a task raising ``error`` after ``delay`` seconds."""

    async def _run() -> Any:
        await asyncio.sleep(delay)
        raise error

    return _run
