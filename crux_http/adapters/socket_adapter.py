"""Low-level HTTP/1.1 adapter on a dedicated ``httpcore`` connection per hop.

Overview
--------
Each hop opens one ``httpcore.AsyncHTTPConnection`` (TLS for ``https``) and
sends the request with ``Connection: close``. Redirects (``301/302/303/307/308``)
are followed up to ``max_redirects`` times; ``303`` and ``301/302`` after
``POST`` switch to a body-less ``GET``. With ``decompress`` the adapter
advertises and decodes ``gzip`` and ``deflate`` bodies, since httpcore hands
back the body exactly as sent.

Timeouts
--------
``config.timeout`` bounds the whole exchange. Per-operation limits come from
:func:`build_timeout`, the same mapping the fetch adapter hands to httpx.

Failure modes
-------------
- httpcore network, protocol and timeout errors, ``TimeoutError`` and
  ``OSError`` are wrapped in a classified :class:`TransportError`.
- A peer that closes before sending a status raises ``ECONNRESET``
  ("socket hang up").
- Corrupt compressed bodies and too many redirects raise
  ``ERR_BAD_RESPONSE``.
- Rejected statuses raise :class:`StatusError` via :func:`settle`.
"""

from __future__ import annotations

import ssl
import zlib
from typing import Any, AsyncIterator, Dict, Optional
from urllib.parse import urljoin, urlsplit

import httpcore

from ..base.errors import ErrorCode, RequestError, create_error, wrap_transport_exception
from ..base.http import build_timeout
from ..base.models import HttpMethod, RequestConfig, Response
from ..base.timeouts import with_timeout
from ..base.utils import build_full_url, decode_body, encode_request_body, encode_request_headers
from .exchange import ProgressTracker, collect_body, settle
from .socket_exchange import SocketExchange

_REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})
_WBITS = {"gzip": 16 + zlib.MAX_WBITS, "x-gzip": 16 + zlib.MAX_WBITS, "deflate": zlib.MAX_WBITS}
_HANG_UP = "without sending a response"
_TRANSPORT_ERRORS = (
    httpcore.TimeoutException,
    httpcore.NetworkError,
    httpcore.ProtocolError,
    httpcore.UnsupportedProtocol,
    TimeoutError,
    OSError,
)


async def _decompressed(chunks: AsyncIterator[bytes], encoding: str) -> AsyncIterator[bytes]:
    decoder = zlib.decompressobj(_WBITS[encoding])
    async for chunk in chunks:
        data = decoder.decompress(chunk)
        if data:
            yield data
    tail = decoder.flush()
    if tail:
        yield tail


class SocketAdapter:
    """Adapter speaking HTTP/1.1 over one connection per exchange.

    Parameters:
        ssl_context: Optional context for ``https`` targets; httpcore's
            default context is used when omitted.
    """

    name = "socket"

    def __init__(self, *, ssl_context: Optional[ssl.SSLContext] = None) -> None:
        self._ssl_context = ssl_context

    async def request(self, config: RequestConfig) -> Response:
        try:
            response = await with_timeout(self._exchange(config), config.timeout)
        except RequestError:
            raise
        except zlib.error as exc:
            raise create_error(f"Invalid compressed body: {exc}", config, ErrorCode.BAD_RESPONSE) from exc
        except httpcore.RemoteProtocolError as exc:
            if _HANG_UP in str(exc):
                raise create_error("socket hang up", config, ErrorCode.CONNECTION_RESET, exc) from exc
            raise wrap_transport_exception(exc, config) from exc
        except _TRANSPORT_ERRORS as exc:
            raise wrap_transport_exception(exc, config) from exc
        return settle(response)

    def _open(self, method: str, url: str, config: RequestConfig) -> SocketExchange:
        try:
            target = urlsplit(url)
            if target.scheme not in ("http", "https") or not target.hostname:
                raise ValueError("scheme must be http or https and a host is required")
            return SocketExchange(method, target, ssl_context=self._ssl_context)
        except ValueError as exc:
            raise create_error(f"Unsupported URL '{url}'", config, ErrorCode.BAD_REQUEST) from exc

    async def _exchange(self, config: RequestConfig) -> Response:
        method = config.method.value
        url = build_full_url(config)
        headers = encode_request_headers(config)
        body = encode_request_body(config, headers)
        if body:
            ProgressTracker(config.on_upload_progress, len(body)).advance(len(body))
        timeouts = build_timeout(config).as_dict()

        hops = 0
        while True:
            exchange = self._open(method, url, config)
            try:
                await exchange.send(headers, body, config.decompress, timeouts)
                location = exchange.headers.get("location")
                if exchange.status in _REDIRECT_STATUSES and location and config.max_redirects > 0:
                    if hops >= config.max_redirects:
                        raise create_error(
                            "Maximum number of redirects exceeded", config, ErrorCode.BAD_RESPONSE, exchange
                        )
                    hops += 1
                    url = urljoin(url, location)
                    if exchange.status == 303 or (
                        exchange.status in (301, 302) and method == HttpMethod.POST.value
                    ):
                        method, body = HttpMethod.GET.value, None
                        headers = {k: v for k, v in headers.items() if k.lower() != "content-type"}
                    continue
                raw = await self._read_body(exchange, config)
            finally:
                await exchange.close()
            return Response(
                data=decode_body(raw, exchange.headers.get("content-type"), config),
                status=exchange.status,
                status_text=exchange.reason,
                headers=exchange.headers,
                config=config,
                request=exchange,
            )

    async def _read_body(self, exchange: SocketExchange, config: RequestConfig) -> bytes:
        headers: Dict[str, Any] = exchange.headers
        chunks = exchange.iter_body()
        encoding = headers.get("content-encoding", "").strip().lower()
        total: Optional[int] = None
        if config.decompress and encoding in _WBITS:
            chunks = _decompressed(chunks, encoding)
            headers.pop("content-encoding", None)
        elif "chunked" not in headers.get("transfer-encoding", "").lower():
            length = headers.get("content-length", "")
            total = int(length) if length.strip().isdigit() else None
        if exchange.method == HttpMethod.HEAD.value:
            total = None
        return await collect_body(chunks, config, total, exchange)


__all__ = ["SocketAdapter"]
