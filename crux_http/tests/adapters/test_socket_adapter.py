"""Socket adapter tests: httpcore client side against a loopback ``asyncio`` server."""
from __future__ import annotations

import asyncio
import base64
import gzip
import json
from typing import Callable, Dict, List

import pytest

from crux_http.adapters.socket_adapter import SocketAdapter
from crux_http.adapters.socket_exchange import SocketExchange
from crux_http.base.errors import StatusError, TransportError
from crux_http.base.models import RequestConfig
from crux_http.config import default_validate_status

Responder = Callable[[str, Dict[str, str], bytes], bytes]


def _http(status: str, headers: Dict[str, str], body: bytes = b"") -> bytes:
    head = [f"HTTP/1.1 {status}"] + [f"{k}: {v}" for k, v in headers.items()]
    return ("\r\n".join(head) + "\r\n\r\n").encode("latin-1") + body


async def _serve(responder: Responder, config_for: Callable[[int], RequestConfig], seen: List[dict]):
    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        request_line = (await reader.readline()).decode("latin-1").strip()
        headers: Dict[str, str] = {}
        while True:
            line = await reader.readline()
            if line in (b"\r\n", b""):
                break
            name, _, value = line.decode("latin-1").partition(":")
            headers[name.strip().lower()] = value.strip()
        body = await reader.readexactly(int(headers.get("content-length", "0")))
        seen.append({"line": request_line, "headers": headers, "body": body})
        writer.write(responder(request_line, headers, body))
        await writer.drain()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        return await SocketAdapter().request(config_for(port))
    finally:
        server.close()
        await server.wait_closed()


def _exchange(responder: Responder, userinfo: str = "", **config) -> tuple:
    seen: List[dict] = []

    def config_for(port: int) -> RequestConfig:
        url = config.pop("url", "/")
        return RequestConfig(url=f"http://{userinfo}127.0.0.1:{port}{url}", **config)

    response = asyncio.run(_serve(responder, config_for, seen))
    return response, seen


def test_get_json_with_content_length():
    payload = json.dumps({"ok": True}).encode()

    def responder(line, headers, body):
        return _http("200 OK", {"Content-Type": "application/json", "Content-Length": str(len(payload))}, payload)

    response, seen = _exchange(responder, url="/items?x=1")

    assert response.status == 200 and response.status_text == "OK"  # nosec B101
    assert response.data == {"ok": True}  # nosec B101
    assert isinstance(response.request, SocketExchange)  # nosec B101
    assert seen[0]["line"] == "GET /items?x=1 HTTP/1.1"  # nosec B101
    assert seen[0]["headers"]["connection"] == "close"  # nosec B101
    assert seen[0]["headers"]["host"].startswith("127.0.0.1:")  # nosec B101


def test_post_body_is_sent_with_content_length():
    def responder(line, headers, body):
        return _http("201 Created", {"Content-Length": str(len(body)), "Content-Type": "text/plain"}, body)

    response, seen = _exchange(responder, url="/echo", method="POST", data="hello")

    assert response.status == 201 and response.data == "hello"  # nosec B101
    assert seen[0]["headers"]["content-length"] == "5"  # nosec B101


def test_chunked_body_and_interim_response_are_handled():
    chunked = b"5\r\nhello\r\n6\r\n world\r\n0\r\n\r\n"

    def responder(line, headers, body):
        interim = b"HTTP/1.1 100 Continue\r\n\r\n"
        return interim + _http("200 OK", {"Transfer-Encoding": "chunked", "Content-Type": "text/plain"}, chunked)

    response, _ = _exchange(responder)
    assert response.data == "hello world"  # nosec B101


def test_gzip_body_is_decompressed_and_repeated_headers_kept():
    payload = gzip.compress(b'{"zipped": true}')

    def responder(line, headers, body):
        head = (
            "HTTP/1.1 200 OK\r\nContent-Type: application/json\r\nContent-Encoding: gzip\r\n"
            "Set-Cookie: a=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT\r\nSet-Cookie: b=2\r\n"
            "Vary: Accept\r\nVary: Origin\r\n"
            f"Content-Length: {len(payload)}\r\n\r\n"
        )
        return head.encode("latin-1") + payload

    response, seen = _exchange(responder)

    assert response.data == {"zipped": True}  # nosec B101
    assert response.headers["set-cookie"] == ["a=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT", "b=2"]  # nosec B101
    assert response.headers["vary"] == "Accept, Origin"  # nosec B101
    assert "content-encoding" not in response.headers  # nosec B101
    assert seen[0]["headers"]["accept-encoding"] == "gzip, deflate"  # nosec B101


def test_body_read_until_eof_without_framing():
    def responder(line, headers, body):
        return _http("200 OK", {"Content-Type": "text/plain"}, b"streamed to close")

    response, _ = _exchange(responder)
    assert response.data == "streamed to close"  # nosec B101


def test_head_response_has_no_body():
    def responder(line, headers, body):
        return _http("200 OK", {"Content-Length": "42"})

    response, seen = _exchange(responder, method="HEAD")
    assert response.data == "" and seen[0]["line"].startswith("HEAD ")  # nosec B101


def test_redirect_is_followed_and_303_switches_to_get():
    def responder(line, headers, body):
        if line.startswith("POST /start"):
            return _http("303 See Other", {"Location": "/final", "Content-Length": "0"})
        return _http("200 OK", {"Content-Type": "text/plain", "Content-Length": "4"}, b"done")

    response, seen = _exchange(responder, url="/start", method="POST", data="x")

    assert response.data == "done"  # nosec B101
    assert [s["line"].split(" ")[0] for s in seen] == ["POST", "GET"]  # nosec B101
    assert seen[1]["body"] == b""  # nosec B101


def test_status_rejected_by_validate_status():
    def responder(line, headers, body):
        return _http("500 Internal Server Error", {"Content-Length": "0"})

    with pytest.raises(StatusError) as info:
        _exchange(responder, validate_status=default_validate_status)
    assert info.value.code == "HTTP_500"  # nosec B101
    assert info.value.response.status_text == "Internal Server Error"  # nosec B101


def test_connection_closed_before_status_is_econnreset():
    def responder(line, headers, body):
        return b""

    with pytest.raises(TransportError) as info:
        _exchange(responder)
    assert info.value.code == "ECONNRESET"  # nosec B101
    assert info.value.message == "socket hang up"  # nosec B101


def test_connection_refused_is_classified():
    async def main():
        server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        server.close()
        await server.wait_closed()
        return await SocketAdapter().request(RequestConfig(url=f"http://127.0.0.1:{port}/"))

    with pytest.raises(TransportError) as info:
        asyncio.run(main())
    assert info.value.code == "ECONNREFUSED"  # nosec B101


def test_unsupported_scheme_is_bad_request():
    with pytest.raises(TransportError) as info:
        asyncio.run(SocketAdapter().request(RequestConfig(url="ftp://127.0.0.1/file")))
    assert info.value.code == "ERR_BAD_REQUEST"  # nosec B101


def test_url_userinfo_becomes_basic_auth():
    def responder(line, headers, body):
        return _http("200 OK", {"Content-Length": "0"})

    _, seen = _exchange(responder, userinfo="alice:s%40cret@")

    expected = "Basic " + base64.b64encode(b"alice:s@cret").decode("ascii")
    assert seen[0]["headers"]["authorization"] == expected  # nosec B101
    assert "@" not in seen[0]["headers"]["host"]  # nosec B101


def test_redirect_limit_is_bad_response():
    def responder(line, headers, body):
        return _http("302 Found", {"Location": "/again", "Content-Length": "0"})

    with pytest.raises(TransportError) as info:
        _exchange(responder, max_redirects=2)
    assert info.value.code == "ERR_BAD_RESPONSE"  # nosec B101
