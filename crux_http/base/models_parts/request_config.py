"""
Request configuration model and layered merge.

Purpose
-------
``RequestConfig`` describes one exchange: target, method, headers, query
parameters, body, timeout, decoding mode, adapter selection and an optional
cancellation token. It is immutable by convention; interceptors that want to
change it should either mutate the per-call copy they receive or return
``config.model_copy(update={...})``.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and explicit-field tracking
  (``model_fields_set``), which is what ``merge_config`` uses to decide
  whether an override "has" a value.

Merge semantics
---------------
``merge_config(base, override)`` copies every field explicitly set on
``base``, then every field explicitly set on ``override``; ``headers`` are the
key-wise union of both mappings with ``override`` winning on conflict.
"""
from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..cancellation import CancelToken
from .enums import AdapterKind, HttpMethod, ResponseType
from .progress_event import ProgressEvent

ProgressCallback = Callable[[ProgressEvent], None]


class RequestConfig(BaseModel):
    """Configuration for a single HTTP exchange.

    Attributes
    ----------
    url:
        Target URL, absolute or relative to ``base_url``.
    method:
        HTTP verb (``GET`` when unset).
    base_url:
        Prefix joined to relative ``url`` values.
    headers:
        Header name to value mapping; values are stringified on the wire.
    params:
        Query parameters appended to the URL; ``None`` values are dropped.
    data:
        Body payload. ``str``/``bytes`` are sent as-is, anything else as JSON.
    timeout:
        Exchange timeout in seconds; ``0`` disables it. Enforced by adapters.
    with_credentials:
        Enables XSRF header mirroring from the outgoing ``Cookie`` header.
    response_type:
        Decoding mode (see :class:`ResponseType`).
    validate_status:
        Predicate deciding which statuses resolve; ``None`` accepts all.
    transform_request / transform_response:
        Functions applied to the body before encoding / after decoding.
    adapter:
        :class:`AdapterKind` or an adapter object exposing ``request``.
    max_redirects / decompress:
        Passed to the transport.
    cancel_token:
        Optional :class:`CancelToken` observed by the orchestrator.
    on_upload_progress / on_download_progress:
        Progress callbacks receiving :class:`ProgressEvent` instances.
    xsrf_cookie_name / xsrf_header_name:
        Cookie read and header written for XSRF protection.
    max_content_length / max_body_length:
        Response / request body caps in bytes; ``-1`` means unlimited.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: Optional[str] = None
    method: HttpMethod = HttpMethod.GET
    base_url: Optional[str] = None
    headers: Dict[str, Any] = Field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None
    data: Any = None
    timeout: float = 0
    with_credentials: bool = False
    response_type: ResponseType = ResponseType.JSON
    validate_status: Optional[Callable[[int], bool]] = None
    transform_request: List[Callable[..., Any]] = Field(default_factory=list)
    transform_response: List[Callable[[Any], Any]] = Field(default_factory=list)
    adapter: Any = AdapterKind.AUTO
    max_redirects: int = 5
    decompress: bool = True
    cancel_token: Optional[CancelToken] = None
    on_upload_progress: Optional[ProgressCallback] = None
    on_download_progress: Optional[ProgressCallback] = None
    xsrf_cookie_name: Optional[str] = "XSRF-TOKEN"
    xsrf_header_name: Optional[str] = "X-XSRF-TOKEN"
    max_content_length: int = -1
    max_body_length: int = -1

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("adapter", mode="before")
    @classmethod
    def _coerce_adapter(cls, value: Any) -> Any:
        if value is None:
            return AdapterKind.AUTO
        if isinstance(value, str):
            return AdapterKind(value.lower())
        if isinstance(value, AdapterKind) or callable(getattr(value, "request", None)):
            return value
        raise ValueError("adapter must be an AdapterKind value or an object with a request() method")

    @classmethod
    def coerce(cls, value: Union["RequestConfig", Mapping[str, Any], None]) -> "RequestConfig":
        """Return ``value`` as a ``RequestConfig`` (mappings are validated)."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))


def merge_config(
    base: RequestConfig,
    override: Union[RequestConfig, Mapping[str, Any], None] = None,
) -> RequestConfig:
    """Layer ``override`` on top of ``base`` and return a new configuration.

    Every field explicitly set on ``override`` replaces the one from ``base``;
    ``headers`` are merged key-wise instead. Neither input is mutated, and a
    ``dict`` or ``list`` body is copied so the result never aliases defaults.
    """
    layer = RequestConfig.coerce(override)
    values: Dict[str, Any] = {name: getattr(base, name) for name in base.model_fields_set}
    values.update({name: getattr(layer, name) for name in layer.model_fields_set})
    values["headers"] = {**base.headers, **layer.headers}
    if isinstance(values.get("data"), (dict, list)):
        values["data"] = copy.deepcopy(values["data"])
    return RequestConfig(**values)


__all__ = ["RequestConfig", "ProgressCallback", "merge_config"]
