"""
Response DTO returned by adapters and the request orchestrator.

The ``request`` field carries the transport's native exchange object for
diagnostics only; it is intentionally excluded from ``to_dict`` so large
object graphs are not logged or persisted by accident.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .request_config import RequestConfig


@dataclass
class Response:
    """Normalized result of one exchange.

    Attributes:
        data: Decoded body (see ``ResponseType``).
        status: Numeric HTTP status.
        status_text: Reason phrase.
        headers: Response headers with lowercase names; repeated
            ``set-cookie`` fields are kept as a list of strings.
        config: Configuration that produced this response.
        request: Opaque transport handle (diagnostics only).
    """

    data: Any
    status: int
    status_text: str
    headers: Dict[str, Any] = field(default_factory=dict)
    config: Optional["RequestConfig"] = None
    request: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable summary excluding body and raw handle."""
        return {
            "status": self.status,
            "status_text": self.status_text,
            "headers": dict(self.headers),
            "method": self.config.method.value if self.config else None,
            "url": self.config.url if self.config else None,
        }


__all__ = ["Response"]
