"""Deferred-task facilities used to trampoline continuation chains.

A scheduler only has to offer ``schedule(fn)``: run ``fn`` with no arguments
on a later turn, first-in first-out among the calls made in the same turn.
:class:`TaskQueue` does this with an explicit queue and a virtual clock, which
makes timing deterministic in tests. :class:`AsyncioScheduler` hands work to
an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import heapq
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from gencont.config import settings
from gencont.core import Computation, Handler
from gencont.errors import SchedulerStepLimitError

log = logger.bind(component="scheduler")

Task = Callable[[], Any]


@runtime_checkable
class Scheduler(Protocol):
    def schedule(self, fn: Task) -> None: ...


@dataclass(order=True)
class _Timer:
    due: int
    seq: int = field(compare=True)
    fn: Task = field(compare=False)


class _DelayMixin(ABC):
    @abstractmethod
    def call_later(self, ticks: int, fn: Task) -> None: ...

    def delay(self, ticks: int, value: Any = None) -> Computation:
        """A continuation that completes with ``value`` after ``ticks``."""

        def computation(callback: Handler) -> None:
            self.call_later(ticks, lambda: callback(None, value))

        return computation


class TaskQueue(_DelayMixin):
    """FIFO task queue with a virtual clock measured in ticks.

    Time only moves when no task is ready: the clock then jumps to the
    earliest timer and every timer due at that tick becomes ready, in the
    order it was registered.
    """

    def __init__(self, max_steps: int | None = None) -> None:
        self._ready: deque[Task] = deque()
        self._timers: list[_Timer] = []
        self._seq = 0
        self._now = 0
        self.max_steps = max_steps if max_steps is not None else settings().max_steps
        self.steps = 0

    @property
    def now(self) -> int:
        return self._now

    @property
    def pending(self) -> int:
        return len(self._ready) + len(self._timers)

    def schedule(self, fn: Task) -> None:
        self._ready.append(fn)

    def call_later(self, ticks: int, fn: Task) -> None:
        if ticks < 0:
            raise ValueError(f"ticks must be non-negative, got {ticks}")
        heapq.heappush(self._timers, _Timer(self._now + ticks, self._seq, fn))
        self._seq += 1

    def run_once(self) -> int:
        """Run the tasks that were ready when the turn began; return how many ran."""

        count = len(self._ready)
        for _ in range(count):
            if self.steps >= self.max_steps:
                raise SchedulerStepLimitError(self.max_steps)
            self._invoke(self._ready.popleft())
        return count

    def run(self) -> int:
        """Drain the queue, advancing the clock as needed. Returns tasks run."""
        return self.run_until(lambda: False)

    def run_until(self, predicate: Callable[[], bool]) -> int:
        """Run turns until ``predicate()`` is true or no work is left.

        ``max_steps`` bounds the tasks run by one call.
        """

        self.steps = 0
        ran = 0
        while not predicate():
            if not self._ready and not self._advance_clock():
                break
            ran += self.run_once()
        log.trace("queue idle at tick {} after {} task(s)", self._now, ran)
        return ran

    def _advance_clock(self) -> bool:
        if not self._timers:
            return False
        due = self._timers[0].due
        self._now = max(self._now, due)
        while self._timers and self._timers[0].due == due:
            self._ready.append(heapq.heappop(self._timers).fn)
        return True

    def _invoke(self, fn: Task) -> None:
        self.steps += 1
        try:
            fn()
        except Exception:
            log.exception("task {!r} raised at tick {}", fn, self._now)
            raise

    def __repr__(self) -> str:
        return f"TaskQueue(now={self._now}, ready={len(self._ready)}, timers={len(self._timers)})"


class AsyncioScheduler(_DelayMixin):
    """Schedule onto an asyncio loop; the running loop is used when none is given."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        tick_seconds: float | None = None,
    ) -> None:
        self._loop = loop
        self.tick_seconds = (
            tick_seconds if tick_seconds is not None else settings().tick_seconds
        )

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule(self, fn: Task) -> None:
        self.loop.call_soon(fn)

    def call_later(self, ticks: int, fn: Task) -> None:
        if ticks < 0:
            raise ValueError(f"ticks must be non-negative, got {ticks}")
        self.loop.call_later(ticks * self.tick_seconds, fn)


__all__ = ["AsyncioScheduler", "Scheduler", "Task", "TaskQueue"]
