from __future__ import annotations

import asyncio
import socket

import httpcore
import httpx

from crux_http.base.errors import (
    ErrorCode,
    RequestError,
    StatusError,
    TransportError,
    classify_exception,
    create_error,
    http_status_code,
    wrap_transport_exception,
)
from crux_http.base.models import RequestConfig, Response


def test_classify_builtin_socket_errors():
    assert classify_exception(ConnectionRefusedError()) is ErrorCode.CONNECTION_REFUSED  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(socket.gaierror(-2, "Name or service not known")) is ErrorCode.HOST_NOT_FOUND  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(ConnectionResetError()) is ErrorCode.CONNECTION_RESET  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(asyncio.IncompleteReadError(b"", 10)) is ErrorCode.CONNECTION_RESET  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101 - assert is appropriate in unit tests


def test_classify_httpx_errors():
    req = httpx.Request("GET", "http://example.test")
    assert classify_exception(httpx.ConnectTimeout("slow", request=req)) is ErrorCode.TIMEOUT  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(httpx.RemoteProtocolError("bad", request=req)) is ErrorCode.BAD_RESPONSE  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(httpx.UnsupportedProtocol("ftp", request=req)) is ErrorCode.BAD_REQUEST  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(httpx.ConnectError("boom", request=req)) is ErrorCode.NETWORK  # nosec B101 - assert is appropriate in unit tests


def test_classify_follows_cause_chain():
    try:
        try:
            raise ConnectionRefusedError("refused")
        except ConnectionRefusedError as inner:
            raise RuntimeError("wrapped") from inner
    except RuntimeError as outer:
        assert classify_exception(outer) is ErrorCode.CONNECTION_REFUSED  # nosec B101 - assert is appropriate in unit tests


def test_classify_heuristics_and_fallback():
    assert classify_exception(OSError("Connect call failed ('127.0.0.1', 9)")) is ErrorCode.CONNECTION_REFUSED  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(OSError("something else")) is ErrorCode.NETWORK  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(ValueError("random")) is ErrorCode.UNKNOWN  # nosec B101 - assert is appropriate in unit tests


def test_create_error_selects_subclass_from_code():
    cfg = RequestConfig(url="/x")
    response = Response(data=None, status=418, status_text="I'm a teapot", config=cfg)
    status_err = create_error("teapot", cfg, http_status_code(418), None, response)
    transport_err = create_error("refused", cfg, ErrorCode.CONNECTION_REFUSED)
    plain = create_error("custom", cfg, "MY_CODE")

    assert type(status_err) is StatusError and status_err.status == 418  # nosec B101 - assert is appropriate in unit tests
    assert type(transport_err) is TransportError and transport_err.code == "ECONNREFUSED"  # nosec B101 - assert is appropriate in unit tests
    assert type(plain) is RequestError and plain.status is None  # nosec B101 - assert is appropriate in unit tests
    assert plain.is_request_error is True  # nosec B101 - assert is appropriate in unit tests


def test_wrap_transport_exception_timeout_message_and_request():
    cfg = RequestConfig(url="/slow", timeout=1.5)
    exc = TimeoutError("operation exceeded 1.5s")
    err = wrap_transport_exception(exc, cfg)
    assert err.code == "ECONNABORTED"  # nosec B101 - assert is appropriate in unit tests
    assert err.message == "timeout of 1.5s exceeded"  # nosec B101 - assert is appropriate in unit tests
    assert err.request is exc  # nosec B101 - assert is appropriate in unit tests


def test_to_dict_is_json_safe_summary():
    cfg = RequestConfig(url="/x", method="DELETE")
    err = create_error("gone", cfg, http_status_code(410), None, Response(None, 410, "Gone", config=cfg))
    assert err.to_dict() == {  # nosec B101 - assert is appropriate in unit tests
        "name": "StatusError",
        "message": "gone",
        "code": "HTTP_410",
        "status": 410,
        "method": "DELETE",
        "url": "/x",
    }


def test_classify_httpcore_errors():
    assert classify_exception(httpcore.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(httpcore.RemoteProtocolError("bad")) is ErrorCode.BAD_RESPONSE  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(httpcore.LocalProtocolError("bad header")) is ErrorCode.BAD_REQUEST  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(httpcore.ConnectError("boom")) is ErrorCode.NETWORK  # nosec B101 - assert is appropriate in unit tests


def test_classify_walks_nested_transport_wrappers():
    # httpx.ConnectError <- httpcore.ConnectError <- OSError <- ConnectionRefusedError
    def raise_nested():
        try:
            try:
                try:
                    raise ConnectionRefusedError(111, "refused")
                except ConnectionRefusedError as refused:
                    raise OSError("All connection attempts failed") from refused
            except OSError as attempts:
                raise httpcore.ConnectError(attempts) from attempts
        except httpcore.ConnectError as core:
            raise httpx.ConnectError(str(core)) from core

    try:
        raise_nested()
    except httpx.ConnectError as exc:
        assert classify_exception(exc) is ErrorCode.CONNECTION_REFUSED  # nosec B101 - assert is appropriate in unit tests
