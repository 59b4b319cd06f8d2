"""Timeout configuration for provider HTTP calls.

No operation in this package imposes an implicit deadline: a request waits
until the server answers, the connection fails, or the caller cancels through
a :class:`CancellationToken`. Deployments that want hard limits opt in through
the environment.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds, ``None`` = wait
    indefinitely).

get_timeout_config()
    Returns a process-cached configuration, re-reading the environment only
    when one of the supported variables changed:
        QUORUM_HTTP_CONNECT_TIMEOUT_SECONDS
        QUORUM_HTTP_READ_TIMEOUT_SECONDS

Failure Modes
-------------
Invalid or non-positive values are ignored (treated as unset).
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

CONNECT_TIMEOUT_ENV = "QUORUM_HTTP_CONNECT_TIMEOUT_SECONDS"
READ_TIMEOUT_ENV = "QUORUM_HTTP_READ_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Deadline for establishing a connection.
        read_timeout_seconds: Deadline between received bytes (applies to
            every chunk of a streamed body as well).
    """

    connect_timeout_seconds: Optional[float] = None
    read_timeout_seconds: Optional[float] = None

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout`` (all ``None`` disables it)."""
        return httpx.Timeout(
            None,
            connect=self.connect_timeout_seconds,
            read=self.read_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str) -> float | None:
    """Parse a positive float from environment variable ``name`` (else ``None``)."""
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        val = float(raw)
    except ValueError:
        return None
    return val if val > 0 else None


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached ``TimeoutConfig``."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = f"{os.getenv(CONNECT_TIMEOUT_ENV, '')}/{os.getenv(READ_TIMEOUT_ENV, '')}"
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(CONNECT_TIMEOUT_ENV),
        read_timeout_seconds=_parse_env_float(READ_TIMEOUT_ENV),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "CONNECT_TIMEOUT_ENV",
    "READ_TIMEOUT_ENV",
]
