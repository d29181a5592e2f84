"""Shared testing utilities for the client test suite.

Exports:
    - assert_true(condition: bool, message: str) -> None
    - run(coro) -> result of ``asyncio.run``
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with the provided message if condition is False."""
    if not condition:
        raise AssertionError(message)


def run(awaitable: Awaitable[Any]) -> Any:
    """Drive ``awaitable`` to completion on a fresh event loop."""

    async def _main() -> Any:
        return await awaitable

    return asyncio.run(_main())
