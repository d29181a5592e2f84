"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements type-based mapping for the exceptions raised by ``httpx``,
``httpcore`` and ``asyncio`` streams, with a message-based heuristic fallback
for wrapped OS errors whose type alone is not conclusive. httpx and httpcore
re-raise lower-level errors ``from`` the original, so the whole cause chain is
inspected.
"""
from __future__ import annotations

import asyncio
import socket
from typing import Iterator, Optional, Tuple, Type

import httpcore
import httpx

from .error_code import ErrorCode

_MAX_CHAIN = 8

_TYPE_MAP: Tuple[Tuple[Tuple[Type[BaseException], ...], ErrorCode], ...] = (
    ((TimeoutError, asyncio.TimeoutError, httpx.TimeoutException, httpcore.TimeoutException), ErrorCode.TIMEOUT),
    ((ConnectionRefusedError,), ErrorCode.CONNECTION_REFUSED),
    ((socket.gaierror,), ErrorCode.HOST_NOT_FOUND),
    ((ConnectionResetError, BrokenPipeError, asyncio.IncompleteReadError), ErrorCode.CONNECTION_RESET),
    (
        (httpx.UnsupportedProtocol, httpx.InvalidURL, httpcore.UnsupportedProtocol, httpcore.LocalProtocolError),
        ErrorCode.BAD_REQUEST,
    ),
    (
        (httpx.RemoteProtocolError, httpx.DecodingError, httpx.TooManyRedirects, httpcore.RemoteProtocolError),
        ErrorCode.BAD_RESPONSE,
    ),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for wrapped OS errors."""
    PATTERN_GROUPS = (
        (ErrorCode.CONNECTION_REFUSED, ("connection refused", "connect call failed")),
        (ErrorCode.HOST_NOT_FOUND, ("name or service not known", "nodename nor servname", "getaddrinfo failed", "name resolution")),
        (ErrorCode.CONNECTION_RESET, ("connection reset", "broken pipe")),
        (ErrorCode.TIMEOUT, ("timed out", "timeout")),
    )
    for code, patterns in PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen and len(seen) < _MAX_CHAIN:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify a transport exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. Type mapping of ``exc``, then of each exception in its
           ``__cause__`` / ``__context__`` chain.
        2. Substring heuristics on the messages along the chain.
        3. ``NETWORK`` for remaining ``httpx.TransportError``,
           ``httpcore.NetworkError`` or ``OSError``.
        4. ``UNKNOWN`` fallback.
    """
    chain = list(_exception_chain(exc))
    for candidate in chain:
        for types, code in _TYPE_MAP:
            if isinstance(candidate, types):
                return code
    for candidate in chain:
        code = _heuristic_from_message(str(candidate).lower())
        if code is not None:
            return code
    if isinstance(exc, (httpx.TransportError, httpcore.NetworkError, OSError)):
        return ErrorCode.NETWORK
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
