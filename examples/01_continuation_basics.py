#!/usr/bin/env python
"""
Example 01: Callback-style effects

Two procedures share one task queue. Each waits on timers and plain
callbacks; the queue's virtual clock decides who resumes first.

Run:
    uv run python examples/01_continuation_basics.py
"""

import sys

from loguru import logger

from gencont import TaskQueue, cont, run

queue = TaskQueue()
driver = cont(queue)


def read_config(callback):
    """A callback-style API: reports (error, value) once."""
    queue.call_later(2, lambda: callback(None, {"retries": 3}))


@driver.do
def worker(name, ticks):
    config = yield read_config
    yield queue.delay(ticks)
    logger.info("{} resumed at tick {}", name, queue.now)
    return f"{name} done with retries={config['retries']}"


def main():
    logger.remove()
    logger.add(sys.stderr, level="INFO")

    worker("slow", 20)(lambda error, value=None: logger.info("slow -> {!r}", value))
    outcome = run(worker("fast", 1), queue)
    logger.info("fast -> {!r}", outcome.unwrap())


if __name__ == "__main__":
    main()
