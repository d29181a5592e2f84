"""One HTTP/1.1 exchange on a dedicated ``httpcore`` connection.

``SocketExchange`` owns a single ``httpcore.AsyncHTTPConnection`` for one
request/response cycle (``Connection: close``). httpcore and h11 handle the
wire protocol: writing the request, framing the body and skipping interim
``1xx`` responses. The exchange adds the headers this client always sends and
exposes the final response head as plain strings. The instance is also the
opaque ``request`` handle exposed on responses and errors.
"""

from __future__ import annotations

import base64
import ssl
from contextlib import AsyncExitStack
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple
from urllib.parse import SplitResult, unquote

import httpcore

from ..base.utils import header_value
from .exchange import response_headers

HeaderList = List[Tuple[bytes, bytes]]


def _host_bytes(host: str) -> bytes:
    return host.encode("ascii") if host.isascii() else host.encode("idna")


def _request_target(target: SplitResult) -> bytes:
    path = target.path or "/"
    if target.query:
        path = f"{path}?{target.query}"
    return path.encode("utf-8")


class SocketExchange:
    """Connection state for one request/response cycle.

    Attributes:
        status: Final status code, ``0`` until the head has been received.
        reason: Reason phrase of the final response.
        headers: Lowercase response header mapping (see ``response_headers``).
    """

    def __init__(
        self,
        method: str,
        target: SplitResult,
        *,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> None:
        self.method = method
        self.target = target
        self.url = target.geturl()
        self.status = 0
        self.reason = ""
        self.headers: Dict[str, Any] = {}
        self._wire_url = httpcore.URL(
            scheme=target.scheme,
            host=_host_bytes(target.hostname or ""),
            port=target.port,
            target=_request_target(target),
        )
        self._connection = httpcore.AsyncHTTPConnection(self._wire_url.origin, ssl_context=ssl_context)
        self._stack = AsyncExitStack()
        self._response: Optional[httpcore.Response] = None

    def request_headers(self, headers: Mapping[str, str], body: Optional[bytes], decompress: bool) -> HeaderList:
        """Return the header list sent on the wire for ``headers``."""
        merged: Dict[str, str] = {}
        if header_value(headers, "Host") is None:
            merged["Host"] = self.target.netloc.rsplit("@", 1)[-1]
        skip = {"connection"} if body is None else {"connection", "content-length"}
        merged.update({k: v for k, v in headers.items() if k.lower() not in skip})
        merged["Connection"] = "close"
        if decompress and header_value(merged, "Accept-Encoding") is None:
            merged["Accept-Encoding"] = "gzip, deflate"
        if self.target.username and header_value(merged, "Authorization") is None:
            userinfo = f"{unquote(self.target.username)}:{unquote(self.target.password or '')}"
            merged["Authorization"] = "Basic " + base64.b64encode(userinfo.encode("utf-8")).decode("ascii")
        return [(name.encode("latin-1"), str(value).encode("latin-1")) for name, value in merged.items()]

    async def send(
        self,
        headers: Mapping[str, str],
        body: Optional[bytes],
        decompress: bool,
        timeouts: Mapping[str, Optional[float]],
    ) -> None:
        """Send the request and receive the final response head."""
        stream = self._connection.stream(
            self.method,
            self._wire_url,
            headers=self.request_headers(headers, body, decompress),
            content=body,
            extensions={"timeout": dict(timeouts)},
        )
        response = await self._stack.enter_async_context(stream)
        self._response = response
        self.status = response.status
        self.reason = response.extensions.get("reason_phrase", b"").decode("latin-1")
        self.headers = response_headers(
            (name.decode("latin-1"), value.decode("latin-1")) for name, value in response.headers
        )

    async def iter_body(self) -> AsyncIterator[bytes]:
        """Yield the raw (still content-encoded) body chunks."""
        if self._response is None:
            raise RuntimeError("exchange has no response")
        async for chunk in self._response.aiter_stream():
            yield chunk

    async def close(self) -> None:
        try:
            await self._stack.aclose()
        finally:
            await self._connection.aclose()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"SocketExchange(method={self.method!r}, url={self.url!r})"


__all__ = ["SocketExchange"]
