"""
Transfer progress event passed to upload/download progress callbacks.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ProgressEvent:
    """Snapshot of bytes transferred so far for one direction of an exchange.

    Attributes:
        loaded: Bytes transferred so far.
        total: Expected total bytes when known (``Content-Length``).
        percent: ``loaded / total * 100`` when ``total`` is known.
        bytes_per_second: Average rate since the transfer started.
        length_computable: Whether ``total`` is known.
    """

    loaded: int
    total: Optional[int] = None
    percent: Optional[float] = None
    bytes_per_second: Optional[float] = None
    length_computable: bool = False

    @classmethod
    def build(cls, loaded: int, total: Optional[int], elapsed_seconds: float) -> "ProgressEvent":
        """Derive the computed fields from raw counters."""
        computable = bool(total)
        return cls(
            loaded=loaded,
            total=total,
            percent=(loaded / total * 100.0) if computable else None,
            bytes_per_second=(loaded / elapsed_seconds) if elapsed_seconds > 0 else None,
            length_computable=computable,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the event fields."""
        return asdict(self)


__all__ = ["ProgressEvent"]
