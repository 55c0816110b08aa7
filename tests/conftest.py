"""
Shared fixtures for gencont tests.

Provides a deterministic task queue, a driver over the continuation
interpreter bound to it, and a loguru sink that collects log records.
"""

from typing import Any

import pytest
from loguru import logger

from gencont import ContinuationInterpreter, Driver, TaskQueue


@pytest.fixture
def queue() -> TaskQueue:
    return TaskQueue()


@pytest.fixture
def interpreter(queue: TaskQueue) -> ContinuationInterpreter:
    return ContinuationInterpreter(queue)


@pytest.fixture
def cont(interpreter: ContinuationInterpreter) -> Driver:
    return Driver(interpreter)


@pytest.fixture
def log_records() -> Any:
    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(handler_id)


class Recorder:
    """Completion handler that remembers every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, Any]] = []

    def __call__(self, error: Any = None, value: Any = None) -> None:
        self.calls.append((error, value))

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def error(self) -> Any:
        return self.calls[0][0]

    @property
    def value(self) -> Any:
        return self.calls[0][1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
