"""Fetch adapter tests driven through ``httpx.MockTransport`` (no network)."""
from __future__ import annotations

import json

import httpx
import pytest

from crux_http.adapters.fetch_adapter import FetchAdapter
from crux_http.base.errors import StatusError, TransportError
from crux_http.base.models import RequestConfig
from crux_http.client import HttpClient
from crux_http.config import default_validate_status
from crux_http.tests.utils import run


def _adapter(handler) -> FetchAdapter:
    return FetchAdapter(transport=httpx.MockTransport(handler))


def test_json_response_is_decoded_with_lowercase_headers():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ok": True}, headers={"X-Trace": "abc"})

    cfg = RequestConfig(url="https://api.test/items", validate_status=default_validate_status)
    response = run(_adapter(handler).request(cfg))

    assert response.status == 200 and response.status_text == "OK"  # nosec B101
    assert response.data == {"ok": True}  # nosec B101
    assert response.headers["x-trace"] == "abc"  # nosec B101
    assert isinstance(response.request, httpx.Request)  # nosec B101


def test_repeated_set_cookie_fields_stay_separate():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            text="ok",
            headers=[("Set-Cookie", "a=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT"), ("Set-Cookie", "b=2")],
        )

    response = run(_adapter(handler).request(RequestConfig(url="https://api.test/")))
    assert response.headers["set-cookie"] == ["a=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT", "b=2"]  # nosec B101


def test_request_line_headers_and_body_reach_transport():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, text="created")

    cfg = RequestConfig(
        method="POST",
        base_url="https://api.test/v1",
        url="/items",
        params={"dry": True},
        headers={"Authorization": "Bearer t", "Content-Type": "application/json"},
        data={"name": "n"},
    )
    response = run(_adapter(handler).request(cfg))

    assert seen == {  # nosec B101
        "method": "POST",
        "url": "https://api.test/v1/items?dry=true",
        "auth": "Bearer t",
        "body": {"name": "n"},
    }
    assert response.data == "created"  # nosec B101


def test_rejected_status_raises_status_error_with_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "missing"})

    cfg = RequestConfig(url="https://api.test/x", validate_status=default_validate_status)
    with pytest.raises(StatusError) as info:
        run(_adapter(handler).request(cfg))

    assert info.value.code == "HTTP_404"  # nosec B101
    assert info.value.response.data == {"error": "missing"}  # nosec B101


def test_connect_error_is_wrapped_as_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(TransportError) as info:
        run(_adapter(handler).request(RequestConfig(url="https://api.test/x")))

    assert info.value.code == "ECONNREFUSED"  # nosec B101
    assert isinstance(info.value.__cause__, httpx.ConnectError)  # nosec B101


def test_timeout_is_reported_as_econnaborted():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(TransportError) as info:
        run(_adapter(handler).request(RequestConfig(url="https://api.test/x", timeout=2)))

    assert info.value.code == "ECONNABORTED"  # nosec B101
    assert info.value.message == "timeout of 2.0s exceeded"  # nosec B101


def test_max_content_length_is_enforced():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"x" * 100)

    cfg = RequestConfig(url="https://api.test/x", max_content_length=10)
    with pytest.raises(TransportError) as info:
        run(_adapter(handler).request(cfg))
    assert info.value.code == "ERR_CONTENT_LENGTH"  # nosec B101


def test_progress_callbacks_receive_events():
    uploads, downloads = [], []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"abcdef", headers={"Content-Type": "text/plain"})

    cfg = RequestConfig(
        method="PUT",
        url="https://api.test/x",
        data="12345",
        on_upload_progress=uploads.append,
        on_download_progress=downloads.append,
    )
    response = run(_adapter(handler).request(cfg))

    assert response.data == "abcdef"  # nosec B101
    assert uploads[-1].loaded == 5 and uploads[-1].percent == 100.0  # nosec B101
    assert downloads[-1].loaded == 6 and downloads[-1].length_computable  # nosec B101


def test_client_end_to_end_with_injected_fetch_adapter():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"user": request.url.path})

    client = HttpClient({"adapter": _adapter(handler), "base_url": "https://api.test"})
    response = run(client.get("/users/1"))
    assert response.data == {"user": "/users/1"}  # nosec B101
