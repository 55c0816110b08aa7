from __future__ import annotations

from typing import Any


class GencontError(Exception):
    """Base class for errors raised by gencont itself."""


class DuplicateCompletionError(GencontError, RuntimeError):
    """Raised into a handler when a completion callback fires a second time."""

    def __init__(self, operation: Any = None) -> None:
        self.operation = operation
        message = "Callback called twice!"
        if operation is not None:
            message += f" (operation: {operation!r})"
        super().__init__(message)


class ProcedureStateError(GencontError):
    """Raised when a suspendable procedure is resumed from an illegal state."""

    def __init__(self, state: Any, action: str) -> None:
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} a procedure in state {state}")


class OutcomeError(GencontError, ValueError):
    """Raised when an outcome carries both an error and a value."""

    def __init__(self, error: BaseException, value: Any) -> None:
        self.error = error
        self.value = value
        super().__init__(
            f"Outcome cannot carry both an error and a value: {error!r}, {value!r}\n"
            "Hint: use `Outcome.failure(error)` or `Outcome.success(value)`"
        )


class SchedulerStepLimitError(GencontError, RuntimeError):
    """Raised when a task queue runs more callbacks than it is allowed to."""

    def __init__(self, max_steps: int) -> None:
        self.max_steps = max_steps
        super().__init__(
            f"Task queue exceeded {max_steps} steps without draining\n"
            "Hint: raise the bound with `TaskQueue(max_steps=...)` or `GENCONT_MAX_STEPS`"
        )


class IncompleteComputationError(GencontError, RuntimeError):
    """Raised when the scheduler drains without the computation reporting back."""


class ConfigError(GencontError, ValueError):
    """Raised when an environment setting cannot be parsed."""

    def __init__(self, key: str, raw: str, expected: str) -> None:
        self.key = key
        self.raw = raw
        super().__init__(f"Invalid value for {key}: {raw!r} (expected {expected})")


__all__ = [
    "ConfigError",
    "DuplicateCompletionError",
    "GencontError",
    "IncompleteComputationError",
    "OutcomeError",
    "ProcedureStateError",
    "SchedulerStepLimitError",
]
