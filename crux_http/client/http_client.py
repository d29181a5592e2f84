"""Request orchestrator.

Purpose
-------
``HttpClient`` owns the default configuration, the interceptor registries and
the resolved transport adapter of one client instance. ``request`` drives a
single call through its lifecycle::

    merge -> cancellation check -> request chain -> cancellation check
          -> dispatch (raced against the token) -> response chain
          -> (on any failure) response failure handler

Logging
-------
Lifecycle events are emitted with ``normalized_log_event`` on the
``crux_http.client`` logger: ``request.start``, ``request.end``,
``request.cancelled`` and ``request.error``. Adapter fallback at construction
logs ``adapter.fallback``.

Failure modes
-------------
- The orchestrator never retries and never swallows a failure; see
  :class:`InterceptorChain` for how the response failure handler shapes the
  raised exception.
- A request chain result that is neither a ``RequestConfig`` nor a mapping
  raises ``TypeError`` (routed through the failure handler like any other
  failure).
"""
from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from ..adapters.environment import RuntimeEnvironment, current_environment
from ..adapters.factory import AdapterFactory, AdapterUnavailableError
from ..base.cancellation import Cancel
from ..base.interceptors import Interceptors
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import AdapterKind, HttpMethod, RequestConfig, Response, merge_config
from ..base.utils import build_full_url
from ..config import get_default_config
from .chain import InterceptorChain
from .dispatch import dispatch

ConfigInput = Union[RequestConfig, Mapping, None]


class HttpClient:
    """Configurable HTTP client instance.

    Parameters
    ----------
    config:
        Instance defaults layered over ``base``.
    environment:
        Runtime descriptor used for adapter selection; detected when omitted.
    base:
        Configuration to layer ``config`` onto. Defaults to
        :func:`crux_http.config.get_default_config`; :meth:`create` passes the
        parent's defaults.
    """

    def __init__(
        self,
        config: ConfigInput = None,
        *,
        environment: Optional[RuntimeEnvironment] = None,
        base: Optional[RequestConfig] = None,
    ) -> None:
        self.defaults: RequestConfig = merge_config(base if base is not None else get_default_config(), config)
        self.interceptors = Interceptors()
        self._environment = environment or current_environment()
        self._logger = get_logger("crux_http.client")
        self._adapters: Dict[AdapterKind, Any] = {}
        self.adapter = self._adapter_for(self.defaults)

    # ------------------------------------------------------------------
    # Adapter resolution

    def _resolve_kind(self, kind: AdapterKind) -> Any:
        cached = self._adapters.get(kind)
        if cached is not None:
            return cached
        try:
            adapter = AdapterFactory.resolve(kind, self._environment)
        except AdapterUnavailableError as exc:
            log_event(
                self._logger,
                "adapter.fallback",
                level=logging.WARNING,
                requested=kind.value,
                adapter=AdapterKind.FETCH.value,
                reason=str(exc),
            )
            adapter = AdapterFactory.create(AdapterKind.FETCH)
        self._adapters[kind] = adapter
        return adapter

    def _adapter_for(self, config: RequestConfig) -> Any:
        # model_copy(update=...) skips validation, so plain strings can get here
        selection = config.adapter if config.adapter is not None else AdapterKind.AUTO
        if isinstance(selection, str):
            try:
                selection = AdapterKind(selection)
            except ValueError as exc:
                raise AdapterUnavailableError(f"Unknown adapter '{selection}'") from exc
            return self._resolve_kind(selection)
        return selection

    # ------------------------------------------------------------------
    # Orchestration

    @staticmethod
    def _call_config(config_or_url: Any, config: ConfigInput, overrides: Dict[str, Any]) -> RequestConfig:
        if isinstance(config_or_url, str):
            layer = merge_config(RequestConfig.coerce(config), {"url": config_or_url})
        else:
            layer = merge_config(RequestConfig.coerce(config_or_url), config)
        return merge_config(layer, overrides) if overrides else layer

    @staticmethod
    def _coerce_chain_result(value: Any) -> RequestConfig:
        if isinstance(value, RequestConfig):
            return value
        if isinstance(value, Mapping):
            return RequestConfig.coerce(value)
        raise TypeError(
            f"request interceptors must produce a RequestConfig or mapping, got {type(value).__name__}"
        )

    async def _run(self, config: RequestConfig) -> Response:
        chain = InterceptorChain(self.interceptors.request.handlers(), self.interceptors.response.handlers())
        try:
            if config.cancel_token is not None:
                config.cancel_token.throw_if_requested()
            effective = self._coerce_chain_result(await chain.run_request(config))
            if effective.cancel_token is not None:
                effective.cancel_token.throw_if_requested()
            response = await dispatch(self._adapter_for(effective), effective, self._logger)
            return await chain.run_response(response)
        except Exception as exc:
            await chain.handle_failure(exc)
            raise

    async def request(self, config_or_url: Any = None, config: ConfigInput = None, **overrides: Any) -> Response:
        """Perform one request.

        Accepts ``request(config)``, ``request(url, config)`` and keyword
        overrides (``request(url, method="POST", data=...)``). Later layers
        win: defaults, then ``config``, then the URL argument and keywords.

        Returns
        -------
        Response
            The value produced by the response interceptor chain (normally the
            adapter's :class:`Response`).

        Raises
        ------
        Cancel
            The token fired before dispatch or while the exchange was pending.
        RequestError
            Transport or status failure raised by the adapter.
        InterceptorRejection
            A response failure handler returned a non-exception value.
        """
        effective = merge_config(self.defaults, self._call_config(config_or_url, config, overrides))
        ctx = LogContext(
            method=effective.method.value,
            url=effective.url,
            request_id=uuid.uuid4().hex[:12],
        )
        started = time.perf_counter()
        normalized_log_event(self._logger, "request.start", ctx, phase="start")
        try:
            response = await self._run(effective)
        except Cancel as exc:
            normalized_log_event(
                self._logger,
                "request.cancelled",
                ctx,
                phase="cancelled",
                error_code=exc.code,
                elapsed_ms=(time.perf_counter() - started) * 1000.0,
                reason=exc.message,
            )
            raise
        except Exception as exc:
            code = getattr(exc, "code", None)
            normalized_log_event(
                self._logger,
                "request.error",
                ctx,
                phase="error",
                error_code=str(code) if code is not None else type(exc).__name__,
                status=getattr(exc, "status", None),
                elapsed_ms=(time.perf_counter() - started) * 1000.0,
                level=logging.WARNING,
                error=str(exc),
            )
            raise
        normalized_log_event(
            self._logger,
            "request.end",
            ctx,
            phase="finalize",
            status=getattr(response, "status", None),
            elapsed_ms=(time.perf_counter() - started) * 1000.0,
        )
        return response

    # ------------------------------------------------------------------
    # Convenience verbs

    async def _send(
        self,
        method: HttpMethod,
        url: str,
        config: ConfigInput,
        overrides: Dict[str, Any],
        data: Any = None,
    ) -> Response:
        overrides["method"] = method
        if data is not None:
            overrides["data"] = data
        return await self.request(url, config, **overrides)

    async def get(self, url: str, config: ConfigInput = None, **overrides: Any) -> Response:
        return await self._send(HttpMethod.GET, url, config, overrides)

    async def delete(self, url: str, config: ConfigInput = None, **overrides: Any) -> Response:
        return await self._send(HttpMethod.DELETE, url, config, overrides)

    async def head(self, url: str, config: ConfigInput = None, **overrides: Any) -> Response:
        return await self._send(HttpMethod.HEAD, url, config, overrides)

    async def options(self, url: str, config: ConfigInput = None, **overrides: Any) -> Response:
        return await self._send(HttpMethod.OPTIONS, url, config, overrides)

    async def post(self, url: str, data: Any = None, config: ConfigInput = None, **overrides: Any) -> Response:
        return await self._send(HttpMethod.POST, url, config, overrides, data)

    async def put(self, url: str, data: Any = None, config: ConfigInput = None, **overrides: Any) -> Response:
        return await self._send(HttpMethod.PUT, url, config, overrides, data)

    async def patch(self, url: str, data: Any = None, config: ConfigInput = None, **overrides: Any) -> Response:
        return await self._send(HttpMethod.PATCH, url, config, overrides, data)

    # ------------------------------------------------------------------
    # Instances

    def create(self, config: ConfigInput = None) -> "HttpClient":
        """Return a new client inheriting these defaults, with fresh interceptors."""
        return HttpClient(config, environment=self._environment, base=self.defaults)

    def get_uri(self, config: ConfigInput = None) -> str:
        """Return the full URL (base URL and query applied) a call would target."""
        return build_full_url(merge_config(self.defaults, config))

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"HttpClient(base_url={self.defaults.base_url!r}, adapter={type(self.adapter).__name__})"


__all__ = ["HttpClient"]
