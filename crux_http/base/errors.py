"""Unified request error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``crux_http.base.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts.error_code import ErrorCode, http_status_code
from .errors_parts.request_error import (
    InterceptorRejection,
    RequestError,
    StatusError,
    TransportError,
)
from .errors_parts.classification import classify_exception
from .errors_parts.factory import create_error, wrap_transport_exception

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
