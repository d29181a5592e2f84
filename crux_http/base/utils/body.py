"""Request body and header encoding shared by both adapters.

Failure modes:
    ``encode_request_body`` raises a :class:`TransportError` with code
    ``ERR_BODY_LENGTH`` when the encoded body exceeds ``max_body_length``.
"""

from __future__ import annotations

import json
from http.cookies import CookieError, SimpleCookie
from typing import Any, Dict, Mapping, Optional

from ..errors import ErrorCode, create_error
from ..models import HttpMethod, RequestConfig

BODYLESS_METHODS = frozenset({HttpMethod.GET, HttpMethod.HEAD})


def header_value(headers: Mapping[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered and value is not None:
            return str(value)
    return None


def _xsrf_token(cookie_header: str, cookie_name: str) -> Optional[str]:
    jar: SimpleCookie = SimpleCookie()
    try:
        jar.load(cookie_header)
    except CookieError:
        return None
    morsel = jar.get(cookie_name)
    return morsel.value if morsel is not None else None


def encode_request_headers(config: RequestConfig) -> Dict[str, str]:
    """Return wire headers: ``None`` values dropped, values stringified.

    With ``with_credentials`` the XSRF cookie carried by the outgoing
    ``Cookie`` header is mirrored into ``xsrf_header_name`` unless that header
    is already present.
    """
    headers = {str(k): str(v) for k, v in config.headers.items() if v is not None}
    if config.with_credentials and config.xsrf_cookie_name and config.xsrf_header_name:
        cookie_header = header_value(headers, "Cookie")
        if cookie_header and header_value(headers, config.xsrf_header_name) is None:
            token = _xsrf_token(cookie_header, config.xsrf_cookie_name)
            if token:
                headers[config.xsrf_header_name] = token
    return headers


def encode_request_body(config: RequestConfig, headers: Optional[Dict[str, str]] = None) -> Optional[bytes]:
    """Apply ``transform_request`` and serialize ``data`` to bytes.

    ``GET``/``HEAD`` requests never carry a body. ``str`` is UTF-8 encoded,
    bytes-like values are sent verbatim and anything else is JSON encoded.
    """
    if config.method in BODYLESS_METHODS:
        return None
    data = config.data
    for transform in config.transform_request:
        data = transform(data, headers if headers is not None else config.headers)
    if data is None:
        return None
    if isinstance(data, (bytes, bytearray, memoryview)):
        body = bytes(data)
    elif isinstance(data, str):
        body = data.encode("utf-8")
    else:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
    if config.max_body_length > -1 and len(body) > config.max_body_length:
        raise create_error(
            f"Request body larger than max_body_length limit ({config.max_body_length} bytes)",
            config,
            ErrorCode.BODY_LENGTH,
        )
    return body


__all__ = ["BODYLESS_METHODS", "header_value", "encode_request_headers", "encode_request_body"]
