"""
Core types shared by the driver and every interpreter.

An interpreter is any object with ``lift`` and ``sequence``. ``lift`` turns a
plain ``(error, value)`` outcome into the interpreter's wrapped computation;
``sequence`` chains a yielded effect value into a continuation that produces
the next wrapped computation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeAlias, TypeVar, runtime_checkable

from gencont._vendor import Err, Ok, Result
from gencont.errors import OutcomeError

T = TypeVar("T")
W = TypeVar("W")

Handler: TypeAlias = Callable[[BaseException | None, Any], None]
Computation: TypeAlias = Callable[[Handler], None]
Continuation: TypeAlias = Callable[[BaseException | None, Any], W]


@runtime_checkable
class EffectInterpreter(Protocol[W]):
    """The lift/sequence pair a driver threads a procedure through."""

    def lift(self, error: BaseException | None, value: Any = None) -> W: ...

    def sequence(self, effect_value: Any, continuation: Continuation[W]) -> W: ...


@dataclass(frozen=True)
class FunctionInterpreter(Generic[W]):
    """Interpreter built from two bare functions."""

    lift_fn: Callable[[BaseException | None, Any], W]
    sequence_fn: Callable[[Any, Continuation[W]], W]

    def lift(self, error: BaseException | None, value: Any = None) -> W:
        return self.lift_fn(error, value)

    def sequence(self, effect_value: Any, continuation: Continuation[W]) -> W:
        return self.sequence_fn(effect_value, continuation)


def is_continuation(obj: Any) -> bool:
    """Return True when ``obj`` should be invoked with a completion handler."""
    return callable(obj)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """An ``(error, value)`` pair; a failed outcome never carries a value."""

    error: BaseException | None = None
    value: T | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise OutcomeError(self.error, self.value)

    @classmethod
    def success(cls, value: T | None = None) -> Outcome[T]:
        return cls(None, value)

    @classmethod
    def failure(cls, error: BaseException) -> Outcome[T]:
        return cls(error, None)

    @classmethod
    def from_result(cls, result: Result[T]) -> Outcome[T]:
        if result.is_err():
            return cls.failure(result.err())
        return cls.success(result.ok())

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T | None:
        """Return the value or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value

    def to_result(self) -> Result[T]:
        if self.error is not None:
            error = self.error
            if not isinstance(error, Exception):
                error = RuntimeError(repr(error))
            return Err(error)
        return Ok(self.value)

    def __iter__(self):
        yield self.error
        yield self.value


__all__ = [
    "Computation",
    "Continuation",
    "EffectInterpreter",
    "FunctionInterpreter",
    "Handler",
    "Outcome",
    "is_continuation",
]
