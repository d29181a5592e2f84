"""crux_http.config.defaults
=========================

Central place for the built-in default values of the client configuration.
They are layered under the optional config file, environment variables and
in-code overrides by :func:`crux_http.config.get_default_config`.

This module avoids importing other crux_http packages; only plain constants
and tiny helpers live here.
"""

from __future__ import annotations

from typing import Any, Dict

CRUX_HTTP_VERSION = "0.1.0"

DEFAULT_USER_AGENT = f"crux-http/{CRUX_HTTP_VERSION}"

# Headers sent with every request unless overridden.
DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "application/json, text/plain, */*",
    "Content-Type": "application/json",
    "User-Agent": DEFAULT_USER_AGENT,
}


def default_validate_status(status: int) -> bool:
    """Accept every ``2xx`` status."""
    return 200 <= status < 300


# Raw values; ``timeout`` is in seconds and ``0`` disables it, ``-1`` caps
# mean unlimited.
DEFAULT_CONFIG: Dict[str, Any] = {
    "method": "GET",
    "headers": DEFAULT_HEADERS,
    "timeout": 0,
    "with_credentials": False,
    "response_type": "json",
    "validate_status": default_validate_status,
    "adapter": "auto",
    "max_redirects": 5,
    "decompress": True,
    "xsrf_cookie_name": "XSRF-TOKEN",
    "xsrf_header_name": "X-XSRF-TOKEN",
    "max_content_length": -1,
    "max_body_length": -1,
}

# Environment variable -> RequestConfig field.
ENV_FIELD_MAP: Dict[str, str] = {
    "CRUX_HTTP_BASE_URL": "base_url",
    "CRUX_HTTP_TIMEOUT": "timeout",
    "CRUX_HTTP_MAX_REDIRECTS": "max_redirects",
    "CRUX_HTTP_ADAPTER": "adapter",
}

USER_AGENT_ENV = "CRUX_HTTP_USER_AGENT"
CONFIG_FILE_ENV = "CRUX_HTTP_CONFIG_FILE"


__all__ = [
    "CRUX_HTTP_VERSION",
    "DEFAULT_USER_AGENT",
    "DEFAULT_HEADERS",
    "DEFAULT_CONFIG",
    "ENV_FIELD_MAP",
    "USER_AGENT_ENV",
    "CONFIG_FILE_ENV",
    "default_validate_status",
]
