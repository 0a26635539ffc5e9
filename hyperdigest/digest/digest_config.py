from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from hyperdigest.env import Env


T = TypeVar("T")


def _resolve_env_value(
    env: Env | None,
    name: str,
    default: T,
    cast: Callable[[object], T],
) -> T:
    env_value = getattr(env, name, None) if env is not None else None
    if env_value is not None:
        return cast(env_value)
    raw_value = os.getenv(name)
    if raw_value is not None:
        return cast(raw_value)
    return default


@dataclass(slots=True)
class DigestConfig:
    """Configuration defaults for digest sizing, buffering and windowing."""

    default_max_size: int = 100
    max_unmerged: int = 2048
    window_duration_seconds: float = 60.0
    max_windows: int = 5

    @classmethod
    def from_env(cls, env: Env | None = None) -> "DigestConfig":
        return cls(
            default_max_size=_resolve_env_value(
                env, "DIGEST_DEFAULT_MAX_SIZE", 100, int
            ),
            max_unmerged=_resolve_env_value(env, "DIGEST_MAX_UNMERGED", 2048, int),
            window_duration_seconds=_resolve_env_value(
                env, "DIGEST_WINDOW_DURATION_SECONDS", 60.0, float
            ),
            max_windows=_resolve_env_value(env, "DIGEST_MAX_WINDOWS", 5, int),
        )
