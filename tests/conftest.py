"""Pytest configuration and shared fixtures."""

from collections.abc import Callable

import pytest

from tests.executor.fixtures import ConcurrencyProbe


@pytest.fixture
def probe() -> ConcurrencyProbe:
    """Create a fresh concurrency probe."""
    return ConcurrencyProbe()


@pytest.fixture
def error_log() -> list[tuple[BaseException, int]]:
    """Collect (error, index) pairs passed to an error handler."""
    return []


@pytest.fixture
def on_error(error_log: list[tuple[BaseException, int]]) -> Callable[[BaseException, int], None]:
    """Error handler that records every call into ``error_log``."""

    def _handler(error: BaseException, index: int) -> None:
        error_log.append((error, index))

    return _handler
