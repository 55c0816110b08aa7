"""
The generic driver.

``drive`` runs a suspendable procedure against any lift/sequence interpreter
and returns one wrapped computation standing for the whole run::

    >>> from gencont import Driver, Ok
    >>> from gencont.instances import ResultInterpreter
    >>> result = Driver(ResultInterpreter())
    >>> @result.do
    ... def add(a, b):
    ...     x = yield Ok(a)
    ...     y = yield Ok(b)
    ...     return x + y
    >>> add(1, 2)
    Ok(value=3)

Every suspension point goes through exactly one ``sequence`` call, and the
run ends in exactly one ``lift`` call. The driver does not look at effect
values or wrapped computations; folding plain values into a success is the
interpreter's job.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, Generic, ParamSpec, TypeVar

from loguru import logger

from gencont.config import settings
from gencont.core import Continuation, EffectInterpreter, FunctionInterpreter
from gencont.procedure import as_procedure

P = ParamSpec("P")
W = TypeVar("W")

log = logger.bind(component="driver")


def _describe(factory: Any) -> str:
    return getattr(factory, "__qualname__", None) or repr(factory)


def drive(interpreter: EffectInterpreter[W], factory: Callable[[], Any]) -> W:
    """Run ``factory`` through ``interpreter`` and return the wrapped run.

    ``factory`` is called with no arguments. A plain return value becomes the
    run's success value; a generator (or any :class:`SuspendableProcedure`) is
    resumed once per yielded effect value. Exceptions raised by the factory or
    while resuming are reported through ``interpreter.lift`` and never escape.
    """

    level = settings().driver_log_level
    name = _describe(factory)

    def start(_error: BaseException | None, _value: Any) -> W:
        log.log(level, "{} starting", name)
        try:
            result = factory()
        except Exception as exc:
            log.log(level, "{} raised before suspending: {!r}", name, exc)
            return interpreter.lift(exc, None)

        procedure = as_procedure(result)
        if procedure is None:
            log.log(level, "{} returned without suspending", name)
            return interpreter.lift(None, result)

        def send(error: BaseException | None, value: Any) -> W:
            try:
                if error is not None:
                    step = procedure.resume_with_error(error)
                else:
                    step = procedure.resume(value)
            except Exception as exc:
                log.log(level, "{} failed: {!r}", name, exc)
                return interpreter.lift(exc, None)

            if step.done:
                log.log(level, "{} finished", name)
                return interpreter.lift(None, step.value)

            log.log(level, "{} suspended on {!r}", name, step.value)
            return interpreter.sequence(step.value, send)

        return interpreter.sequence(interpreter.lift(None, None), send)

    return interpreter.sequence(interpreter.lift(None, None), start)


class Driver(Generic[W]):
    """A driver bound to one interpreter.

    Calling the driver with a zero-argument factory is the same as
    :func:`drive`; :meth:`do` turns a generator function into a function that
    returns wrapped computations.
    """

    def __init__(self, interpreter: EffectInterpreter[W]) -> None:
        self.interpreter = interpreter

    def __call__(self, factory: Callable[[], Any]) -> W:
        return drive(self.interpreter, factory)

    def do(self, func: Callable[P, Any]) -> Callable[P, W]:
        interpreter = self.interpreter

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> W:
            def factory() -> Any:
                return func(*args, **kwargs)

            factory.__qualname__ = getattr(func, "__qualname__", "factory")
            return drive(interpreter, factory)

        return wrapper

    def __repr__(self) -> str:
        return f"Driver({self.interpreter!r})"


def monad(
    lift: Callable[[BaseException | None, Any], W],
    sequence: Callable[[Any, Continuation[W]], W],
) -> Driver[W]:
    """Build a :class:`Driver` straight from a lift and a sequence function."""
    return Driver(FunctionInterpreter(lift, sequence))


__all__ = ["Driver", "drive", "monad"]
