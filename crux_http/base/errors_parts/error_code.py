"""
Normalized transport error codes (taxonomy).

Defines the `ErrorCode` enumeration used by adapters and error handling
utilities. Values mirror the conventional socket/HTTP client error names and
are considered a stable public contract for logging and branching.

HTTP-status failures are not enumerated: their code is the dynamic string
``HTTP_<status>`` produced by :func:`http_status_code`.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated network-level error codes."""

    CONNECTION_REFUSED = "ECONNREFUSED"
    CONNECTION_RESET = "ECONNRESET"
    HOST_NOT_FOUND = "ENOTFOUND"
    TIMEOUT = "ECONNABORTED"
    NETWORK = "ERR_NETWORK"
    CANCELED = "ERR_CANCELED"
    CONTENT_LENGTH = "ERR_CONTENT_LENGTH"
    BODY_LENGTH = "ERR_BODY_LENGTH"
    BAD_REQUEST = "ERR_BAD_REQUEST"
    BAD_RESPONSE = "ERR_BAD_RESPONSE"
    UNKNOWN = "ERR_UNKNOWN"


HTTP_CODE_PREFIX = "HTTP_"


def http_status_code(status: int) -> str:
    """Return the ``HTTP_<status>`` code used for status failures."""
    return f"{HTTP_CODE_PREFIX}{status}"


__all__ = ["ErrorCode", "HTTP_CODE_PREFIX", "http_status_code"]
