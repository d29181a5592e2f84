"""Serialization helpers shared by transport adapters."""

from .url import build_full_url, build_url, combine_urls, is_absolute_url
from .body import encode_request_body, encode_request_headers, header_value
from .decoding import charset_of, decode_body, parse_xml

__all__ = [
    "build_full_url",
    "build_url",
    "combine_urls",
    "is_absolute_url",
    "encode_request_body",
    "encode_request_headers",
    "header_value",
    "charset_of",
    "decode_body",
    "parse_xml",
]
