"""
Transport-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``crux_http.base.models_parts`` to preserve stable imports while enforcing
governance on file size and cohesion.
"""

from .models_parts.enums import AdapterKind, HttpMethod, ResponseType
from .models_parts.progress_event import ProgressEvent
from .models_parts.blob import Blob
from .models_parts.request_config import ProgressCallback, RequestConfig, merge_config
from .models_parts.response import Response

__all__ = [
    "AdapterKind",
    "HttpMethod",
    "ResponseType",
    "ProgressEvent",
    "ProgressCallback",
    "Blob",
    "RequestConfig",
    "merge_config",
    "Response",
]
