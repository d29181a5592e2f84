"""Interceptor chain execution for one request.

Runs a snapshot of the request and response registries around a dispatch:

- Request handlers fold left-to-right with promise-``then`` semantics: a value
  flows to the next ``on_success``, a failure flows to the next
  ``on_failure`` (entries without one are skipped) and an ``on_failure`` that
  returns normally puts its result back on the success track.
- Response ``on_success`` handlers fold left-to-right; the first raise ends
  the fold.
- Failures are handed to the first registered response ``on_failure`` only.
  Whatever it does, the call still fails: its own exception, the exception
  instance it returned, or :class:`InterceptorRejection` wrapping any other
  returned value.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, List, NoReturn, Optional

from ..base.errors import InterceptorRejection
from ..base.interceptors import FailureHandler, Interceptor
from ..base.models import RequestConfig, Response


async def resolve(value: Any) -> Any:
    """Await ``value`` when it is awaitable, else return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass
class InterceptorChain:
    """Snapshot of the handler entries used for one request.

    Attributes:
        request_handlers: Live request entries in registration order.
        response_handlers: Live response entries in registration order.
    """

    request_handlers: List[Interceptor[RequestConfig]]
    response_handlers: List[Interceptor[Response]]

    async def run_request(self, config: RequestConfig) -> Any:
        """Fold the request handlers over ``config`` and return the final value."""
        value: Any = config
        error: Optional[Exception] = None
        for entry in self.request_handlers:
            handler = entry.on_success if error is None else entry.on_failure
            if handler is None:
                continue
            try:
                value = await resolve(handler(value if error is None else error))
            except Exception as exc:
                error = exc
            else:
                error = None
        if error is not None:
            raise error
        return value

    async def run_response(self, response: Response) -> Any:
        """Fold the response ``on_success`` handlers over ``response``."""
        value: Any = response
        for entry in self.response_handlers:
            if entry.on_success is not None:
                value = await resolve(entry.on_success(value))
        return value

    def failure_handler(self) -> Optional[FailureHandler]:
        """Return the first registered response ``on_failure`` handler."""
        for entry in self.response_handlers:
            if entry.on_failure is not None:
                return entry.on_failure
        return None

    async def handle_failure(self, error: Exception) -> NoReturn:
        """Route ``error`` through the response failure handler and raise."""
        handler = self.failure_handler()
        if handler is None:
            raise error
        value = await resolve(handler(error))
        if isinstance(value, BaseException):
            raise value
        raise InterceptorRejection(value, error) from error


__all__ = ["InterceptorChain", "resolve"]
