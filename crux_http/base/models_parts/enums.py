"""
Enumerations shared by request configurations and adapters.

Values are lowercase (uppercase for HTTP methods) and are considered a stable
public contract: configuration files and environment overrides use the raw
string values.
"""
from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP verbs understood by the client surface."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class ResponseType(str, Enum):
    """Desired response decoding mode.

    ``JSON`` is the automatic mode: JSON when the content type says so (text on
    parse failure), XML for XML content types, text otherwise. The remaining
    members force a single decoding.
    """

    JSON = "json"
    TEXT = "text"
    BLOB = "blob"
    ARRAYBUFFER = "arraybuffer"
    XML = "xml"


class AdapterKind(str, Enum):
    """Transport adapter selection mode."""

    FETCH = "fetch"
    SOCKET = "socket"
    AUTO = "auto"


__all__ = ["HttpMethod", "ResponseType", "AdapterKind"]
