"""
Suspendable procedures.

A procedure runs until it reaches a suspension point, hands out an effect
value and waits to be resumed with either a value or an error. Python
generators are the usual source; :class:`GeneratorProcedure` wraps one in an
explicit state machine so the driver never touches ``send``/``throw``
directly.
"""

from __future__ import annotations

import inspect
from collections.abc import Generator
from enum import Enum, auto
from typing import Any, NamedTuple, Protocol, runtime_checkable

from gencont.errors import ProcedureStateError


class Step(NamedTuple):
    """Result of resuming a procedure: the next effect value, or the final one."""

    done: bool
    value: Any


class ProcedureState(Enum):
    CREATED = auto()
    RUNNING = auto()
    SUSPENDED = auto()
    DONE = auto()
    FAILED = auto()


@runtime_checkable
class SuspendableProcedure(Protocol):
    def resume(self, value: Any) -> Step: ...

    def resume_with_error(self, error: BaseException) -> Step: ...


class GeneratorProcedure:
    """Drive a generator through the :class:`SuspendableProcedure` protocol."""

    __slots__ = ("_gen", "_state", "effect", "suspensions")

    def __init__(self, gen: Generator[Any, Any, Any]) -> None:
        self._gen = gen
        self._state = ProcedureState.CREATED
        self.effect: Any = None
        self.suspensions = 0

    @property
    def state(self) -> ProcedureState:
        return self._state

    @property
    def name(self) -> str:
        return getattr(self._gen, "__qualname__", type(self._gen).__name__)

    def resume(self, value: Any) -> Step:
        return self._advance("resume", self._gen.send, value)

    def resume_with_error(self, error: BaseException) -> Step:
        return self._advance("resume_with_error", self._gen.throw, error)

    def _advance(self, action: str, op: Any, arg: Any) -> Step:
        if self._state not in (ProcedureState.CREATED, ProcedureState.SUSPENDED):
            raise ProcedureStateError(self._state, action)

        self._state = ProcedureState.RUNNING
        try:
            effect = op(arg)
        except StopIteration as stop_exc:
            self._state = ProcedureState.DONE
            self.effect = None
            return Step(True, stop_exc.value)
        except BaseException:
            self._state = ProcedureState.FAILED
            self.effect = None
            raise

        self._state = ProcedureState.SUSPENDED
        self.effect = effect
        self.suspensions += 1
        return Step(False, effect)

    def __repr__(self) -> str:
        return f"GeneratorProcedure({self.name}, state={self._state.name}, suspensions={self.suspensions})"


def as_procedure(obj: Any) -> SuspendableProcedure | None:
    """Return ``obj`` as a procedure, or ``None`` when it is a plain result."""

    if inspect.isgenerator(obj):
        return GeneratorProcedure(obj)
    if isinstance(obj, SuspendableProcedure):
        return obj
    return None


__all__ = [
    "GeneratorProcedure",
    "ProcedureState",
    "Step",
    "SuspendableProcedure",
    "as_procedure",
]
