"""
gencont - generator-driven monadic sequencing for Python.

A generator function is driven through an interpreter's ``lift`` and
``sequence`` operations, so the same ``yield``-based code can run against
callbacks, results or optional values.

Example:
    >>> from gencont import TaskQueue, cont, run
    >>>
    >>> queue = TaskQueue()
    >>> def fetch(callback):
    ...     queue.call_later(3, lambda: callback(None, 21))
    >>>
    >>> @cont(queue).do
    ... def program():
    ...     value = yield fetch
    ...     return value * 2
    >>>
    >>> run(program(), queue).value
    42
"""

from gencont._vendor import NOTHING, Err, FrozenDict, Maybe, Nothing, Ok, Result, Some
from gencont.config import Settings, load_settings, settings
from gencont.continuation import ContinuationInterpreter, FireResult, SingleFireGuard, cont
from gencont.core import (
    Computation,
    Continuation,
    EffectInterpreter,
    FunctionInterpreter,
    Handler,
    Outcome,
    is_continuation,
)
from gencont.driver import Driver, drive, monad
from gencont.errors import (
    ConfigError,
    DuplicateCompletionError,
    GencontError,
    IncompleteComputationError,
    OutcomeError,
    ProcedureStateError,
    SchedulerStepLimitError,
)
from gencont.instances import IdentityInterpreter, MaybeInterpreter, ResultInterpreter, lookup
from gencont.procedure import (
    GeneratorProcedure,
    ProcedureState,
    Step,
    SuspendableProcedure,
    as_procedure,
)
from gencont.run import run, run_async, to_awaitable
from gencont.scheduler import AsyncioScheduler, Scheduler, TaskQueue

__version__ = "0.1.0"

__all__ = [
    # Driver
    "Driver",
    "drive",
    "monad",
    # Core types
    "Computation",
    "Continuation",
    "EffectInterpreter",
    "FunctionInterpreter",
    "Handler",
    "Outcome",
    "is_continuation",
    # Procedures
    "GeneratorProcedure",
    "ProcedureState",
    "Step",
    "SuspendableProcedure",
    "as_procedure",
    # Continuation interpreter
    "ContinuationInterpreter",
    "FireResult",
    "SingleFireGuard",
    "cont",
    # Schedulers
    "AsyncioScheduler",
    "Scheduler",
    "TaskQueue",
    # Runners
    "run",
    "run_async",
    "to_awaitable",
    # Example interpreters
    "IdentityInterpreter",
    "MaybeInterpreter",
    "ResultInterpreter",
    "lookup",
    # Vendored types
    "NOTHING",
    "Err",
    "FrozenDict",
    "Maybe",
    "Nothing",
    "Ok",
    "Result",
    "Some",
    # Config
    "Settings",
    "load_settings",
    "settings",
    # Errors
    "ConfigError",
    "DuplicateCompletionError",
    "GencontError",
    "IncompleteComputationError",
    "OutcomeError",
    "ProcedureStateError",
    "SchedulerStepLimitError",
]
