"""
Continuation interpreter.

Here a wrapped computation is a function taking one completion handler
``handler(error, value)``. Yielding a callable from a procedure means "call
this with a handler and resume me with what it reports"; yielding anything
else resumes the procedure with that value on the next turn.

Two rules keep chains well-behaved:

* the next computation is *decided* as soon as an effect settles, but it is
  *invoked* on a later scheduler turn, so the stack stays flat and callers
  never see a handler fire synchronously;
* each ``sequence`` invocation honours one completion. A second one is
  reported to the caller as :class:`DuplicateCompletionError`, later ones are
  only logged.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

from loguru import logger

from gencont.core import Computation, Continuation, Handler, is_continuation
from gencont.driver import Driver
from gencont.errors import DuplicateCompletionError
from gencont.scheduler import Scheduler

log = logger.bind(component="continuation")


class FireResult(Enum):
    FIRST = auto()
    DUPLICATE = auto()
    SUPPRESSED = auto()


class SingleFireGuard:
    """Tracks whether a completion handler has already fired."""

    __slots__ = ("fired", "duplicates")

    def __init__(self) -> None:
        self.fired = False
        self.duplicates = 0

    def fire(self) -> FireResult:
        if not self.fired:
            self.fired = True
            return FireResult.FIRST
        self.duplicates += 1
        if self.duplicates == 1:
            return FireResult.DUPLICATE
        return FireResult.SUPPRESSED


class ContinuationInterpreter:
    """lift/sequence for callback-style computations, trampolined on ``scheduler``."""

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler

    def lift(self, error: BaseException | None, value: Any = None) -> Computation:
        def computation(callback: Handler) -> None:
            callback(error, value)

        return computation

    def sequence(
        self, effect_value: Any, continuation: Continuation[Computation]
    ) -> Computation:
        scheduler = self.scheduler

        def computation(callback: Handler) -> None:
            guard = SingleFireGuard()

            def settle(error: BaseException | None = None, result: Any = None) -> None:
                verdict = guard.fire()
                if verdict is FireResult.DUPLICATE:
                    callback(DuplicateCompletionError(effect_value), None)
                    return
                if verdict is FireResult.SUPPRESSED:
                    log.warning(
                        "dropped completion #{} of {!r}: error={!r} value={!r}",
                        guard.duplicates + 1,
                        effect_value,
                        error,
                        result,
                    )
                    return

                try:
                    next_task = continuation(error, result)
                except Exception as exc:
                    next_task = self.lift(exc, None)
                scheduler.schedule(lambda: next_task(callback))

            if not is_continuation(effect_value):
                settle(None, effect_value)
                return
            try:
                effect_value(settle)
            except Exception as exc:
                settle(exc, None)

        return computation

    def __repr__(self) -> str:
        return f"ContinuationInterpreter({self.scheduler!r})"


def cont(scheduler: Scheduler) -> Driver[Computation]:
    """Driver over a :class:`ContinuationInterpreter` on ``scheduler``."""
    return Driver(ContinuationInterpreter(scheduler))


__all__ = [
    "ContinuationInterpreter",
    "FireResult",
    "SingleFireGuard",
    "cont",
]
