"""Unified configuration layer for the client defaults.

Goals
-----
* Centralize the default request configuration.
* Merge sources in a predictable order:
    1. Built-in defaults (``defaults.DEFAULT_CONFIG``)
    2. Optional JSON config file pointed to by ``CRUX_HTTP_CONFIG_FILE``
    3. Environment variables
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_default_config(overrides=None)``.

Environment Variables
---------------------
CRUX_HTTP_BASE_URL, CRUX_HTTP_TIMEOUT (seconds), CRUX_HTTP_MAX_REDIRECTS,
CRUX_HTTP_ADAPTER (``auto``/``fetch``/``socket``) and CRUX_HTTP_USER_AGENT.
Values that fail validation are ignored with a ``config.invalid_value``
warning.

External Config File (Optional)
-------------------------------
A JSON object whose keys are ``RequestConfig`` field names, e.g.::

    {"base_url": "https://api.example.com", "timeout": 5,
     "headers": {"X-Team": "core"}}

Headers from every layer are merged key-wise; other fields replace.

Public API
----------
* get_default_config(overrides: Mapping | RequestConfig | None = None) -> RequestConfig
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from ..base.logging import get_logger, log_event
from ..base.models import RequestConfig, merge_config
from .defaults import (
    CONFIG_FILE_ENV,
    DEFAULT_CONFIG,
    ENV_FIELD_MAP,
    USER_AGENT_ENV,
    default_validate_status,
)

_logger = get_logger(__name__)

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_GUARD: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Return the parsed config file, cached per path."""
    global _FILE_CACHE, _FILE_GUARD
    path = os.getenv(CONFIG_FILE_ENV, "")
    if _FILE_CACHE is not None and _FILE_GUARD == path:
        return _FILE_CACHE
    data: Any = {}
    p = Path(path) if path else None
    if p is not None and p.is_file():
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except ValueError as exc:
            log_event(_logger, "config.file_invalid", level=logging.WARNING, path=path, error=str(exc))
            data = {}
    if not isinstance(data, dict):
        log_event(_logger, "config.file_invalid", level=logging.WARNING, path=path, error="not an object")
        data = {}
    _FILE_CACHE, _FILE_GUARD = data, path
    return data


def _valid_layer(source: str, values: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the entries that validate as ``RequestConfig`` fields."""
    out: Dict[str, Any] = {}
    for field, value in values.items():
        if field not in RequestConfig.model_fields:
            log_event(_logger, "config.unknown_field", level=logging.WARNING, source=source, field=field)
            continue
        try:
            RequestConfig.model_validate({field: value})
        except ValidationError as exc:
            log_event(
                _logger,
                "config.invalid_value",
                level=logging.WARNING,
                source=source,
                field=field,
                error=str(exc.errors()[0].get("msg")),
            )
            continue
        out[field] = value
    return out


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for var, field in ENV_FIELD_MAP.items():
        val = os.getenv(var)
        if val:
            out[field] = val.strip()
    agent = os.getenv(USER_AGENT_ENV)
    if agent:
        out["headers"] = {"User-Agent": agent}
    return out


def get_default_config(
    overrides: Union[RequestConfig, Mapping[str, Any], None] = None,
) -> RequestConfig:
    """Return the merged default configuration.

    Merge order (later wins): defaults -> config file -> env vars -> overrides
    """
    cfg = RequestConfig(**DEFAULT_CONFIG)
    cfg = merge_config(cfg, _valid_layer("file", _load_external_config()))
    cfg = merge_config(cfg, _valid_layer("env", _env_overrides()))
    if overrides is not None:
        cfg = merge_config(cfg, overrides)
    return cfg


__all__ = ["get_default_config", "default_validate_status", "DEFAULT_CONFIG"]
