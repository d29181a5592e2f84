"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`crux_http.base.models_parts` if needed, while `crux_http.base.models` remains
the primary stable import path.
"""

from .enums import AdapterKind, HttpMethod, ResponseType
from .progress_event import ProgressEvent
from .blob import Blob
from .request_config import RequestConfig, merge_config
from .response import Response

__all__ = [
    "AdapterKind",
    "HttpMethod",
    "ResponseType",
    "ProgressEvent",
    "Blob",
    "RequestConfig",
    "merge_config",
    "Response",
]
