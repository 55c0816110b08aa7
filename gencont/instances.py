"""
Synchronous interpreters built on the generic driver.

These run entirely on the call stack: the wrapped computation is the final
answer itself (a raw value, a :class:`Result` or a :class:`Maybe`).

    >>> from gencont import Driver
    >>> maybe = Driver(MaybeInterpreter())
    >>> data = {"address": {"name": "Name"}}
    >>> @maybe.do
    ... def street():
    ...     address = yield lookup(data, "address")
    ...     return (yield lookup(address, "street"))
    >>> street()
    Nothing()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gencont._vendor import NOTHING, Err, Maybe, Ok, Result, Some
from gencont.core import Continuation


class IdentityInterpreter:
    """Wrapped computations are plain values; failures are raised."""

    def lift(self, error: BaseException | None, value: Any = None) -> Any:
        if error is not None:
            raise error
        return value

    def sequence(self, effect_value: Any, continuation: Continuation[Any]) -> Any:
        return continuation(None, effect_value)


class ResultInterpreter:
    """Wrapped computations are :class:`Result` values; ``Err`` short-circuits."""

    def lift(self, error: BaseException | None, value: Any = None) -> Result[Any]:
        if error is not None:
            if not isinstance(error, Exception):
                raise error
            return Err(error)
        return Ok(value)

    def sequence(
        self, effect_value: Any, continuation: Continuation[Result[Any]]
    ) -> Result[Any]:
        if isinstance(effect_value, Err):
            return effect_value
        if isinstance(effect_value, Ok):
            return continuation(None, effect_value.unwrap())
        return continuation(None, effect_value)


class MaybeInterpreter:
    """Wrapped computations are :class:`Maybe` values; ``NOTHING`` short-circuits."""

    def lift(self, error: BaseException | None, value: Any = None) -> Maybe[Any]:
        if error is not None:
            raise error
        return Some(value)

    def sequence(
        self, effect_value: Any, continuation: Continuation[Maybe[Any]]
    ) -> Maybe[Any]:
        if effect_value is NOTHING:
            return NOTHING
        if isinstance(effect_value, Some):
            return continuation(None, effect_value.value)
        return continuation(None, effect_value)


def lookup(mapping: Mapping[Any, Any], key: Any) -> Maybe[Any]:
    """``Some(mapping[key])`` when present, ``NOTHING`` otherwise."""
    if key in mapping:
        return Some(mapping[key])
    return NOTHING


__all__ = [
    "IdentityInterpreter",
    "MaybeInterpreter",
    "ResultInterpreter",
    "lookup",
]
