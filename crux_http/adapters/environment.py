"""Runtime environment descriptor used for adapter selection.

``detect_environment`` is a pure function of its injectable inputs so tests
can describe any host (e.g. a browser-hosted interpreter without sockets)
without patching ``sys``. ``current_environment`` caches the detection for the
running process.
"""

from __future__ import annotations

import importlib.util
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Optional

_SOCKETLESS_PLATFORMS = frozenset({"emscripten", "wasi"})


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Capabilities of the host interpreter relevant to transports.

    Attributes:
        runtime: Interpreter implementation name (``cpython``, ``pypy``...).
        platform: ``sys.platform`` value.
        has_fetch: Whether the ``httpx`` client stack is importable.
        has_sockets: Whether TCP sockets can be opened and ``httpcore`` is
            importable.
    """

    runtime: str
    platform: str
    has_fetch: bool
    has_sockets: bool


def detect_environment(
    *,
    platform: Optional[str] = None,
    implementation: Optional[str] = None,
    find_spec: Callable[[str], Any] = importlib.util.find_spec,
) -> RuntimeEnvironment:
    """Describe the current (or a hypothetical) runtime."""
    plat = platform if platform is not None else sys.platform
    runtime = implementation if implementation is not None else sys.implementation.name
    return RuntimeEnvironment(
        runtime=runtime,
        platform=plat,
        has_fetch=find_spec("httpx") is not None,
        has_sockets=plat not in _SOCKETLESS_PLATFORMS and find_spec("httpcore") is not None,
    )


@lru_cache(maxsize=1)
def current_environment() -> RuntimeEnvironment:
    """Return the cached descriptor of the running interpreter."""
    return detect_environment()


__all__ = ["RuntimeEnvironment", "detect_environment", "current_environment"]
