"""Deterministic in-memory adapter for offline testing.

Purpose
-------
Implement the adapter contract without any network traffic. Responses come
from a route table keyed by ``(METHOD, url)``; every config handed to the
adapter is recorded in ``calls`` so tests can assert on what the orchestrator
actually dispatched (for example headers added by interceptors).

Lookup order
------------
1. ``(method, config.url)``
2. ``(method, full URL)`` with ``base_url`` and query parameters applied
3. No match: a ``404`` response, settled like any other status.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..adapters.exchange import settle
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import RequestConfig, Response
from ..base.utils import build_full_url, decode_body

RouteKey = Tuple[str, str]


@dataclass
class MockRoute:
    """Canned outcome for one route.

    ``data`` given as ``bytes`` or ``str`` is decoded like a wire body
    (honoring ``response_type`` and the ``content-type`` header); other values
    are deep-copied so callers never share mutable fixtures.
    """

    status: int = 200
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    error: Optional[BaseException] = None
    delay: float = 0


def _status_text(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


class MockAdapter:
    """Adapter that returns canned responses instead of performing exchanges."""

    name = "mock"

    def __init__(self, routes: Optional[Mapping[RouteKey, MockRoute]] = None) -> None:
        self._routes: Dict[RouteKey, MockRoute] = {
            (method.upper(), url): route for (method, url), route in (routes or {}).items()
        }
        self.calls: List[RequestConfig] = []
        self._logger = get_logger("crux_http.mock")

    def on(
        self,
        method: str,
        url: str,
        *,
        status: int = 200,
        data: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        error: Optional[BaseException] = None,
        delay: float = 0,
    ) -> "MockAdapter":
        """Register (or replace) a route; returns ``self`` for chaining."""
        self._routes[(method.upper(), url)] = MockRoute(
            status=status,
            data=data,
            headers={k.lower(): v for k, v in (headers or {}).items()},
            error=error,
            delay=delay,
        )
        return self

    def _lookup(self, config: RequestConfig) -> Optional[MockRoute]:
        method = config.method.value
        route = self._routes.get((method, config.url or ""))
        if route is None:
            route = self._routes.get((method, build_full_url(config)))
        return route

    async def request(self, config: RequestConfig) -> Response:
        self.calls.append(config)
        route = self._lookup(config)
        ctx = LogContext(method=config.method.value, url=config.url)
        normalized_log_event(
            self._logger,
            "mock.exchange",
            ctx,
            phase="dispatch",
            status=route.status if route else 404,
            level=logging.DEBUG,
            matched=route is not None,
        )
        if route is None:
            route = MockRoute(status=404)
        if route.delay:
            await asyncio.sleep(route.delay)
        if route.error is not None:
            raise route.error
        return settle(
            Response(
                data=self._body(route, config),
                status=route.status,
                status_text=_status_text(route.status),
                headers=dict(route.headers),
                config=config,
                request=route,
            )
        )

    @staticmethod
    def _body(route: MockRoute, config: RequestConfig) -> Any:
        if isinstance(route.data, (bytes, str)):
            raw = route.data.encode("utf-8") if isinstance(route.data, str) else route.data
            return decode_body(raw, route.headers.get("content-type"), config)
        data = copy.deepcopy(route.data)
        for transform in config.transform_response:
            data = transform(data)
        return data


__all__ = ["MockAdapter", "MockRoute"]
