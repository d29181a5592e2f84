"""
Binary payload returned for the ``blob`` response type.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Blob:
    """Raw response bytes tagged with their declared content type.

    Attributes:
        content: Undecoded body bytes.
        content_type: Value of the ``Content-Type`` response header (may be empty).
    """

    content: bytes
    content_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the content, replacing undecodable bytes."""
        return self.content.decode(encoding, errors="replace")


__all__ = ["Blob"]
