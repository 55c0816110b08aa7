"""
Environment-driven settings for gencont.

Settings are read once per process from ``GENCONT_*`` environment variables.
Tests and embedders can build their own with :func:`load_settings`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from gencont._vendor import FrozenDict
from gencont.errors import ConfigError

DEBUG_ENV_KEY = "GENCONT_DEBUG"
MAX_STEPS_ENV_KEY = "GENCONT_MAX_STEPS"
TICK_SECONDS_ENV_KEY = "GENCONT_TICK_SECONDS"

DEFAULT_MAX_STEPS = 1_000_000
DEFAULT_TICK_SECONDS = 0.001

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    debug: bool = False
    max_steps: int = DEFAULT_MAX_STEPS
    tick_seconds: float = DEFAULT_TICK_SECONDS

    @property
    def driver_log_level(self) -> str:
        """Level used for per-step driver logging."""
        return "DEBUG" if self.debug else "TRACE"

    def as_env(self) -> FrozenDict:
        return FrozenDict(
            {
                DEBUG_ENV_KEY: "1" if self.debug else "0",
                MAX_STEPS_ENV_KEY: str(self.max_steps),
                TICK_SECONDS_ENV_KEY: repr(self.tick_seconds),
            }
        )


def _parse_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(key, raw, "a positive integer") from exc
    if value <= 0:
        raise ConfigError(key, raw, "a positive integer")
    return value


def _parse_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(key, raw, "a non-negative number") from exc
    if value < 0:
        raise ConfigError(key, raw, "a non-negative number")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``environ`` (defaults to ``os.environ``)."""

    env = FrozenDict(os.environ if environ is None else environ)
    return Settings(
        debug=env.get(DEBUG_ENV_KEY, "").lower() in _TRUTHY,
        max_steps=_parse_int(env, MAX_STEPS_ENV_KEY, DEFAULT_MAX_STEPS),
        tick_seconds=_parse_float(env, TICK_SECONDS_ENV_KEY, DEFAULT_TICK_SECONDS),
    )


@lru_cache(maxsize=1)
def settings() -> Settings:
    """Process-wide settings, loaded on first use."""
    return load_settings()


__all__ = [
    "DEBUG_ENV_KEY",
    "DEFAULT_MAX_STEPS",
    "DEFAULT_TICK_SECONDS",
    "MAX_STEPS_ENV_KEY",
    "Settings",
    "TICK_SECONDS_ENV_KEY",
    "load_settings",
    "settings",
]
