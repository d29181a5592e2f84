"""crux_http package

Promise-style asynchronous HTTP client with cancellation tokens, interceptor
chains and pluggable transport adapters.

Purpose:
    Provide a small, stable API for issuing requests either through the
    module-level default client (``await crux_http.get(url)``) or through
    dedicated instances (``crux_http.create({"base_url": ...})``).

Public API (re-exported):
    - Version: ``__version__``
    - Requests: :func:`request`, :func:`get`, :func:`post`, :func:`put`,
      :func:`patch`, :func:`delete`, :func:`head`, :func:`options`
    - Instances: :func:`create`, :func:`default_client`, :class:`HttpClient`
    - Cancellation: :class:`Cancel`, :class:`CancelToken`, :func:`is_cancel`
    - Helpers: :func:`gather`, :func:`spread`, :func:`merge_config`,
      :func:`build_url`, :func:`create_error`
    - Errors: :class:`RequestError`, :class:`TransportError`,
      :class:`StatusError`, :class:`InterceptorRejection`, :class:`ErrorCode`

Notes:
    - The default client is created on first use so that environment
      configuration is read lazily.
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

from .base.cancellation import Cancel, CancelToken, CancelTokenSource, is_cancel
from .base.errors import (
    ErrorCode,
    InterceptorRejection,
    RequestError,
    StatusError,
    TransportError,
    create_error,
)
from .base.interceptors import InterceptorManager
from .base.models import AdapterKind, HttpMethod, RequestConfig, Response, ResponseType, merge_config
from .base.utils import build_url
from .client import HttpClient
from .config.defaults import CRUX_HTTP_VERSION

__version__ = CRUX_HTTP_VERSION

T = TypeVar("T")

_DEFAULT_CLIENT: Optional[HttpClient] = None


def default_client() -> HttpClient:
    """Return the process-wide default client, creating it on first use."""
    global _DEFAULT_CLIENT
    if _DEFAULT_CLIENT is None:
        _DEFAULT_CLIENT = HttpClient()
    return _DEFAULT_CLIENT


async def request(config_or_url: Any = None, config: Any = None, **overrides: Any) -> Response:
    return await default_client().request(config_or_url, config, **overrides)


async def get(url: str, config: Any = None, **overrides: Any) -> Response:
    return await default_client().get(url, config, **overrides)


async def delete(url: str, config: Any = None, **overrides: Any) -> Response:
    return await default_client().delete(url, config, **overrides)


async def head(url: str, config: Any = None, **overrides: Any) -> Response:
    return await default_client().head(url, config, **overrides)


async def options(url: str, config: Any = None, **overrides: Any) -> Response:
    return await default_client().options(url, config, **overrides)


async def post(url: str, data: Any = None, config: Any = None, **overrides: Any) -> Response:
    return await default_client().post(url, data, config, **overrides)


async def put(url: str, data: Any = None, config: Any = None, **overrides: Any) -> Response:
    return await default_client().put(url, data, config, **overrides)


async def patch(url: str, data: Any = None, config: Any = None, **overrides: Any) -> Response:
    return await default_client().patch(url, data, config, **overrides)


def create(config: Any = None) -> HttpClient:
    """Return a new client layered over the default client's configuration."""
    return default_client().create(config)


async def gather(*aws: Awaitable[T]) -> List[T]:
    """Await every awaitable concurrently; the first failure propagates."""
    return list(await asyncio.gather(*aws))


def spread(callback: Callable[..., T]) -> Callable[[Sequence[Any]], T]:
    """Adapt ``callback(a, b, c)`` to be called as ``fn([a, b, c])``."""

    def wrapper(values: Sequence[Any]) -> T:
        return callback(*values)

    return wrapper


__all__ = [
    # Version
    "__version__",
    # Requests
    "request",
    "get",
    "post",
    "put",
    "patch",
    "delete",
    "head",
    "options",
    # Instances
    "create",
    "default_client",
    "HttpClient",
    # Cancellation
    "Cancel",
    "CancelToken",
    "CancelTokenSource",
    "is_cancel",
    # Helpers
    "gather",
    "spread",
    "merge_config",
    "build_url",
    "create_error",
    # Models
    "AdapterKind",
    "HttpMethod",
    "RequestConfig",
    "Response",
    "ResponseType",
    "InterceptorManager",
    # Errors
    "ErrorCode",
    "RequestError",
    "TransportError",
    "StatusError",
    "InterceptorRejection",
]
