"""Unit tests for RequestConfig validation and layered merging."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from crux_http.base.cancellation import CancelToken
from crux_http.base.models import AdapterKind, HttpMethod, RequestConfig, ResponseType, merge_config
from crux_http.mock import MockAdapter


def test_headers_are_unioned_with_override_winning():
    base = RequestConfig(headers={"A": "1", "B": "2"})
    merged = merge_config(base, {"headers": {"B": "3", "C": "4"}})
    assert merged.headers == {"A": "1", "B": "3", "C": "4"}  # nosec B101


def test_merge_does_not_mutate_inputs():
    base = RequestConfig(url="/a", headers={"A": "1"})
    override = RequestConfig(url="/b", headers={"B": "2"})
    merged = merge_config(base, override)
    merged.headers["C"] = "3"

    assert base.headers == {"A": "1"} and base.url == "/a"  # nosec B101
    assert override.headers == {"B": "2"} and override.url == "/b"  # nosec B101
    assert merged.url == "/b"  # nosec B101


def test_unset_override_fields_keep_base_values():
    base = RequestConfig(timeout=3, method="post", base_url="https://api.test")
    merged = merge_config(base, {"url": "/users"})
    assert merged.timeout == 3  # nosec B101
    assert merged.method is HttpMethod.POST  # nosec B101
    assert merged.base_url == "https://api.test"  # nosec B101
    assert merged.url == "/users"  # nosec B101


def test_explicit_override_replaces_even_falsy_values():
    base = RequestConfig(timeout=3, decompress=True)
    merged = merge_config(base, {"timeout": 0, "decompress": False})
    assert merged.timeout == 0 and merged.decompress is False  # nosec B101


def test_merge_with_none_copies_base():
    token, _ = CancelToken.source()
    base = RequestConfig(url="/x", cancel_token=token)
    merged = merge_config(base)
    assert merged is not base  # nosec B101
    assert merged.url == "/x" and merged.cancel_token is token  # nosec B101


def test_adapter_field_accepts_kinds_strings_and_objects():
    mock = MockAdapter()
    assert RequestConfig(adapter="SOCKET").adapter is AdapterKind.SOCKET  # nosec B101
    assert RequestConfig(adapter=None).adapter is AdapterKind.AUTO  # nosec B101
    assert RequestConfig(adapter=mock).adapter is mock  # nosec B101
    with pytest.raises(ValidationError):
        RequestConfig(adapter=object())


def test_defaults_are_documented_values():
    cfg = RequestConfig()
    assert cfg.method is HttpMethod.GET  # nosec B101
    assert cfg.response_type is ResponseType.JSON  # nosec B101
    assert cfg.timeout == 0 and cfg.max_redirects == 5  # nosec B101
    assert cfg.max_content_length == -1 and cfg.max_body_length == -1  # nosec B101
    assert cfg.xsrf_cookie_name == "XSRF-TOKEN"  # nosec B101


def test_structured_body_is_not_shared_with_defaults():
    defaults = RequestConfig(data={"tags": ["a"]})
    merged = merge_config(defaults, {"url": "/x"})
    merged.data["tags"].append("b")
    assert defaults.data == {"tags": ["a"]}  # nosec B101
