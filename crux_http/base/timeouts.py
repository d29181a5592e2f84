"""Unified timeout utilities for transport adapters.

This module centralizes the timeout values adapters use in addition to the
per-request ``RequestConfig.timeout`` and exposes an awaitable guard that
turns an elapsed deadline into ``TimeoutError``.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever the variables change). Supported
    environment variables (all optional):
        CRUX_HTTP_CONNECT_TIMEOUT
        CRUX_HTTP_READ_TIMEOUT

with_timeout(awaitable, seconds)
    Await ``awaitable`` under a wall clock deadline; ``seconds <= 0`` means no
    deadline.

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache after first read).
3. The orchestrator itself never enforces a timeout; adapters do.
"""
from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Upper bound for establishing a connection
            when the request itself carries no timeout.
        read_timeout_seconds: Optional idle bound between body chunks when the
            request carries no timeout (``None`` = wait indefinitely).
    """

    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float | None = None


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:  # pragma: no cover - defensive
        return default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    cur_guard = "/".join(
        [os.getenv("CRUX_HTTP_CONNECT_TIMEOUT", ""), os.getenv("CRUX_HTTP_READ_TIMEOUT", "")]
    )
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    connect = _parse_env_float("CRUX_HTTP_CONNECT_TIMEOUT", 10.0)
    read = _parse_env_float("CRUX_HTTP_READ_TIMEOUT", None)
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=float(connect),
        read_timeout_seconds=float(read) if read is not None else None,
    )
    _ENV_GUARD = cur_guard
    return _CACHED


async def with_timeout(awaitable: Awaitable[T], seconds: Optional[float]) -> T:
    """Await ``awaitable``, raising ``TimeoutError`` after ``seconds``.

    ``None`` or a non-positive value disables the deadline.
    """
    if not seconds or seconds <= 0:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as exc:
        raise TimeoutError(f"operation exceeded {seconds}s") from exc


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "with_timeout",
]
