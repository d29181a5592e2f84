"""Helpers shared by the concrete adapters for one exchange.

``settle`` applies ``validate_status`` to a fully built response, turning a
rejected status into a :class:`StatusError` coded ``HTTP_<status>``.
``collect_body`` drains a response body stream while enforcing
``max_content_length`` and reporting download progress. ``response_headers``
builds the lowercase header mapping both network adapters expose.
"""

from __future__ import annotations

import time
from typing import Any, AsyncIterator, Dict, Iterable, Optional, Tuple

from ..base.errors import ErrorCode, create_error, http_status_code
from ..base.models import ProgressCallback, ProgressEvent, RequestConfig, Response


def settle(response: Response) -> Response:
    """Return ``response`` or raise when its config rejects the status."""
    config = response.config
    validate = config.validate_status if config is not None else None
    if validate is None or validate(response.status):
        return response
    raise create_error(
        f"Request failed with status code {response.status}",
        config,
        http_status_code(response.status),
        response.request,
        response,
    )


def response_headers(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """Return response header fields keyed by lowercase name.

    Repeated ``set-cookie`` fields stay separate as a list since cookie values
    may contain commas; other repeated fields are joined with ``", "``.
    """
    headers: Dict[str, Any] = {}
    for name, value in pairs:
        key = name.lower()
        if key == "set-cookie":
            headers.setdefault(key, []).append(value)
        elif key in headers:
            headers[key] = f"{headers[key]}, {value}"
        else:
            headers[key] = value
    return headers


class ProgressTracker:
    """Accumulate transferred byte counts and emit :class:`ProgressEvent`."""

    def __init__(self, callback: Optional[ProgressCallback], total: Optional[int] = None) -> None:
        self.callback = callback
        self.total = total
        self.loaded = 0
        self._started = time.monotonic()

    def advance(self, count: int) -> None:
        self.loaded += count
        if self.callback is not None:
            self.callback(ProgressEvent.build(self.loaded, self.total, time.monotonic() - self._started))


def _content_length_error(config: RequestConfig, request: Any):
    return create_error(
        f"max_content_length size of {config.max_content_length} exceeded",
        config,
        ErrorCode.CONTENT_LENGTH,
        request,
    )


async def collect_body(
    chunks: AsyncIterator[bytes],
    config: RequestConfig,
    total: Optional[int] = None,
    request: Any = None,
) -> bytes:
    """Read every chunk of a response body into memory.

    Raises:
        TransportError: ``ERR_CONTENT_LENGTH`` when the announced or received
            size exceeds ``config.max_content_length``.
    """
    cap = config.max_content_length
    if cap > -1 and total is not None and total > cap:
        raise _content_length_error(config, request)
    tracker = ProgressTracker(config.on_download_progress, total)
    buffer = bytearray()
    async for chunk in chunks:
        if not chunk:
            continue
        buffer.extend(chunk)
        if cap > -1 and len(buffer) > cap:
            raise _content_length_error(config, request)
        tracker.advance(len(chunk))
    return bytes(buffer)


__all__ = ["settle", "ProgressTracker", "collect_body", "response_headers"]
