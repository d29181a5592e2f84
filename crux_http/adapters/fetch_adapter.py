"""High-level HTTP adapter backed by ``httpx``.

Overview
--------
Performs one exchange through a per-call ``httpx.AsyncClient``: headers and
body are encoded by the shared codec, the response body is streamed so that
``max_content_length`` and download progress can be enforced chunk by chunk,
and the decoded :class:`Response` is settled against ``validate_status``.

Timeouts
--------
``config.timeout`` bounds the whole exchange (``with_timeout``) in addition to
the per-operation ``httpx.Timeout`` built by :func:`build_timeout`.

Failure modes
-------------
- ``httpx`` transport errors, ``TimeoutError`` and ``OSError`` are wrapped in a
  classified :class:`TransportError`.
- Rejected statuses raise :class:`StatusError` via :func:`settle`.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from ..base.errors import RequestError, wrap_transport_exception
from ..base.http import build_httpx_client
from ..base.models import RequestConfig, Response
from ..base.timeouts import with_timeout
from ..base.utils import build_full_url, decode_body, encode_request_body, encode_request_headers
from .exchange import ProgressTracker, collect_body, response_headers, settle


def _content_length(headers: httpx.Headers) -> Optional[int]:
    raw = headers.get("content-length")
    if raw is None or not raw.strip().isdigit():
        return None
    return int(raw)


class FetchAdapter:
    """Adapter performing exchanges with ``httpx``.

    Parameters:
        transport: Optional ``httpx.AsyncBaseTransport`` (for example
            ``httpx.MockTransport``) used instead of the network.
    """

    name = "fetch"

    def __init__(self, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    async def request(self, config: RequestConfig) -> Response:
        try:
            response = await with_timeout(self._exchange(config), config.timeout)
        except RequestError:
            raise
        except (httpx.HTTPError, httpx.InvalidURL, TimeoutError, OSError) as exc:
            raise wrap_transport_exception(exc, config) from exc
        return settle(response)

    async def _exchange(self, config: RequestConfig) -> Response:
        url = build_full_url(config)
        headers = encode_request_headers(config)
        body = encode_request_body(config, headers)
        if body:
            ProgressTracker(config.on_upload_progress, len(body)).advance(len(body))

        async with build_httpx_client(config, transport=self._transport) as client:
            request = client.build_request(config.method.value, url, headers=headers, content=body)
            resp = await client.send(request, stream=True)
            try:
                chunks: Any = resp.aiter_bytes() if config.decompress else resp.aiter_raw()
                raw = await collect_body(chunks, config, _content_length(resp.headers), request)
            finally:
                await resp.aclose()

        return Response(
            data=decode_body(raw, resp.headers.get("content-type"), config),
            status=resp.status_code,
            status_text=resp.reason_phrase,
            headers=response_headers(resp.headers.multi_items()),
            config=config,
            request=request,
        )


__all__ = ["FetchAdapter"]
