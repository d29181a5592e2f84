"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_http.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, http_status_code
from .request_error import InterceptorRejection, RequestError, StatusError, TransportError
from .classification import classify_exception
from .factory import create_error, wrap_transport_exception

__all__ = [
    "ErrorCode",
    "http_status_code",
    "RequestError",
    "TransportError",
    "StatusError",
    "InterceptorRejection",
    "classify_exception",
    "create_error",
    "wrap_transport_exception",
]
