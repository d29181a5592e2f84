"""Response body decoding shared by both adapters.

Decoding follows ``RequestConfig.response_type``; the automatic ``json`` mode
sniffs the ``Content-Type`` header. XML that fails to parse falls back to the
raw text and emits an ``xml.parse_failed`` warning event.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from xml.etree import ElementTree

from ..logging import get_logger, log_event
from ..models import Blob, RequestConfig, ResponseType

_logger = get_logger(__name__)

_XML_TYPES = ("application/xml", "text/xml")


def charset_of(content_type: str, default: str = "utf-8") -> str:
    """Extract the ``charset`` parameter from a ``Content-Type`` value."""
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip().strip('"')
    return default


def parse_xml(text: str) -> Any:
    """Parse ``text`` into an ``Element``; return ``text`` unchanged on error."""
    try:
        return ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        log_event(_logger, "xml.parse_failed", level=logging.WARNING, error=str(exc))
        return text


def _is_json(content_type: str) -> bool:
    media = content_type.split(";")[0].strip().lower()
    return media == "application/json" or media.endswith("+json")


def decode_body(raw: bytes, content_type: Optional[str], config: RequestConfig) -> Any:
    """Decode ``raw`` per ``config.response_type`` then apply ``transform_response``."""
    content_type = content_type or ""
    mode = config.response_type
    if mode is ResponseType.BLOB:
        data: Any = Blob(content=raw, content_type=content_type)
    elif mode is ResponseType.ARRAYBUFFER:
        data = bytes(raw)
    else:
        text = raw.decode(charset_of(content_type), errors="replace")
        if mode is ResponseType.TEXT:
            data = text
        elif mode is ResponseType.XML:
            data = parse_xml(text)
        elif _is_json(content_type):
            try:
                data = json.loads(text) if text else None
            except ValueError:
                data = text
        elif any(xml_type in content_type.lower() for xml_type in _XML_TYPES):
            data = parse_xml(text)
        else:
            data = text
    for transform in config.transform_response:
        data = transform(data)
    return data


__all__ = ["charset_of", "parse_xml", "decode_body"]
