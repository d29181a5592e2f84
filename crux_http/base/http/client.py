"""httpx client construction for the fetch adapter.

Purpose:
    Provide the single place where ``httpx.AsyncClient`` instances are
    configured from a ``RequestConfig`` so timeout and redirect settings are
    derived consistently. Timeouts come from the request's ``timeout`` when set
    and otherwise from :func:`get_timeout_config` (connect bound only).

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Lifecycle:
    - A client is created per exchange and closed by the caller (``async
      with``). Connection pooling across exchanges is deliberately not
      provided; a client bound to one event loop cannot be shared safely with
      callers that drive each request through ``asyncio.run``.
    - ``transport`` lets callers (and tests) inject ``httpx.MockTransport`` or
      any ``httpx.AsyncBaseTransport``.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..models import RequestConfig
from ..timeouts import get_timeout_config


def build_timeout(config: RequestConfig) -> httpx.Timeout:
    """Return the ``httpx.Timeout`` for ``config``."""
    if config.timeout and config.timeout > 0:
        return httpx.Timeout(config.timeout)
    cfg = get_timeout_config()
    return httpx.Timeout(None, connect=cfg.connect_timeout_seconds, read=cfg.read_timeout_seconds)


def build_httpx_client(
    config: RequestConfig,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` configured for one exchange.

    Redirects are followed only when ``max_redirects`` is positive, and then
    at most ``max_redirects`` times (enforced by httpx).
    """
    follow = config.max_redirects > 0
    kwargs = {
        "timeout": build_timeout(config),
        "follow_redirects": follow,
        "max_redirects": config.max_redirects if follow else 0,
    }
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


__all__ = ["build_httpx_client", "build_timeout"]
