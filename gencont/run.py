"""
Run continuation computations to completion.

``run`` is the synchronous entry point: it hands the computation a recording
handler and drains a :class:`TaskQueue`. ``run_async`` does the same on the
running asyncio loop.

Example:
    >>> from gencont import TaskQueue, cont, run
    >>> queue = TaskQueue()
    >>> @cont(queue).do
    ... def greet(name):
    ...     wait = yield queue.delay(5, "hello")
    ...     return f"{wait} {name}"
    >>> run(greet("world"), queue).unwrap()
    'hello world'
"""

from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger

from gencont.core import Computation, Outcome
from gencont.errors import IncompleteComputationError
from gencont.scheduler import TaskQueue

log = logger.bind(component="run")


def run(computation: Computation, scheduler: TaskQueue | None = None) -> Outcome[Any]:
    """Invoke ``computation`` and drain ``scheduler`` until it reports back.

    The first report wins; the queue is still drained so pending timers of
    other runs on the same queue get their turn.
    """

    queue = scheduler if scheduler is not None else TaskQueue()
    reports: list[Outcome[Any]] = []

    def handler(error: BaseException | None, value: Any = None) -> None:
        if reports:
            log.debug("ignoring extra report error={!r} value={!r}", error, value)
            return
        reports.append(Outcome.failure(error) if error is not None else Outcome.success(value))

    computation(handler)
    queue.run()
    if not reports:
        raise IncompleteComputationError(
            f"{computation!r} never reported a result (queue drained at tick {queue.now})"
        )
    return reports[0]


def to_awaitable(
    computation: Computation,
    loop: asyncio.AbstractEventLoop | None = None,
) -> asyncio.Future[Outcome[Any]]:
    """Invoke ``computation`` and return a future resolved by its first report.

    The future belongs to ``loop``, or to the running loop when none is given.
    """

    if loop is None:
        loop = asyncio.get_running_loop()
    future: asyncio.Future[Outcome[Any]] = loop.create_future()

    def handler(error: BaseException | None, value: Any = None) -> None:
        if future.done():
            log.debug("ignoring extra report error={!r} value={!r}", error, value)
            return
        future.set_result(Outcome.failure(error) if error is not None else Outcome.success(value))

    computation(handler)
    return future


async def run_async(
    computation: Computation,
    loop: asyncio.AbstractEventLoop | None = None,
) -> Outcome[Any]:
    """Await the outcome of ``computation`` on ``loop`` (default: the running loop)."""
    return await to_awaitable(computation, loop)


__all__ = ["run", "run_async", "to_awaitable"]
