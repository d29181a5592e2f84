"""
HTTP Client Base Package

Exports the transport-agnostic building blocks used by the orchestrator and
the adapters:

- Models (DTOs): request configuration, response, progress events
- Errors: normalized error codes and tagged request errors
- Cancellation: one-shot cancellation tokens
- Interceptors: sparse handler registries
- Timeouts: process-cached timeout configuration
"""

from .cancellation import Cancel, CancelToken, CancelTokenSource, is_cancel
from .errors import (
    ErrorCode,
    InterceptorRejection,
    RequestError,
    StatusError,
    TransportError,
    classify_exception,
    create_error,
    http_status_code,
)
from .interceptors import Interceptor, InterceptorManager, Interceptors
from .models import (
    AdapterKind,
    Blob,
    HttpMethod,
    ProgressEvent,
    RequestConfig,
    Response,
    ResponseType,
    merge_config,
)
from .timeouts import TimeoutConfig, get_timeout_config, with_timeout

__all__ = [
    # Cancellation
    "Cancel",
    "CancelToken",
    "CancelTokenSource",
    "is_cancel",
    # Errors
    "ErrorCode",
    "InterceptorRejection",
    "RequestError",
    "StatusError",
    "TransportError",
    "classify_exception",
    "create_error",
    "http_status_code",
    # Interceptors
    "Interceptor",
    "InterceptorManager",
    "Interceptors",
    # Models
    "AdapterKind",
    "Blob",
    "HttpMethod",
    "ProgressEvent",
    "RequestConfig",
    "Response",
    "ResponseType",
    "merge_config",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
    "with_timeout",
]
