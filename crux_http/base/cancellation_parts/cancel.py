"""Cancellation reason type.

Defines the public ``Cancel`` reason raised by requests that observe a fired
cancellation token, plus the ``is_cancel`` predicate. Kept isolated to satisfy
the one-class-per-file policy.
"""

from __future__ import annotations

from typing import Any, Optional

from ..errors_parts.error_code import ErrorCode


class Cancel(RuntimeError):
    """Reason attached to a fired :class:`CancelToken`.

    The instance is created once, when the token's ``cancel`` function is first
    called, and is then raised unchanged by every observer of that token. This
    lets callers distinguish cooperative cancellation from transport or status
    failures (e.g., suppress log noise or skip error reporting).

    Attributes:
        message: Optional human-readable explanation supplied to ``cancel``.
        code: Always ``ERR_CANCELED`` so every request failure carries a code.
    """

    code = ErrorCode.CANCELED.value

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Cancel: {self.message}" if self.message else "Cancel"

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Cancel(message={self.message!r})"


def is_cancel(value: Any) -> bool:
    """Return ``True`` only for genuine :class:`Cancel` instances."""
    return isinstance(value, Cancel)


__all__ = ["Cancel", "is_cancel"]
