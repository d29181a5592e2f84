"""Pytest configuration for the client test suite.

Clears every ``CRUX_HTTP_*`` environment variable for the duration of each
test so host configuration never leaks into assertions, and provides a client
wired to the in-memory :class:`MockAdapter`.
"""

from __future__ import annotations

import os
from typing import Iterator

import pytest

from crux_http.client import HttpClient
from crux_http.mock import MockAdapter


@pytest.fixture(autouse=True)
def clean_crux_http_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove ``CRUX_HTTP_*`` variables inherited from the host."""

    for name in list(os.environ):
        if name.startswith("CRUX_HTTP_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture()
def mock_adapter() -> MockAdapter:
    """Return an empty ``MockAdapter``; tests register routes with ``on``."""

    return MockAdapter()


@pytest.fixture()
def client(mock_adapter: MockAdapter) -> HttpClient:
    """Return a client whose default adapter is ``mock_adapter``."""

    return HttpClient({"adapter": mock_adapter})
