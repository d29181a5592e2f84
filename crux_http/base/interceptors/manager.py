"""Sparse, append-only interceptor registry.

Separates handler storage from the chain execution in
``crux_http.client.chain`` to keep dependencies minimal and respect
one-class-per-file guidance.

Slots are never compacted: :meth:`InterceptorManager.eject` nulls a slot so
ids handed out earlier stay valid, and iteration simply skips the holes. Only
:meth:`InterceptorManager.clear` resets id allocation.
"""

from __future__ import annotations

from typing import Callable, Generic, List, Optional, TypeVar

from .interceptor import FailureHandler, Interceptor, SuccessHandler

T = TypeVar("T")


class InterceptorManager(Generic[T]):
    """Ordered registry of interceptor entries for one payload type."""

    def __init__(self) -> None:
        self._entries: List[Optional[Interceptor[T]]] = []

    def use(
        self,
        on_success: Optional[SuccessHandler[T]] = None,
        on_failure: Optional[FailureHandler] = None,
    ) -> int:
        """Append a handler pair and return its stable slot id."""
        self._entries.append(Interceptor(on_success=on_success, on_failure=on_failure))
        return len(self._entries) - 1

    def eject(self, interceptor_id: int) -> None:
        """Null the slot at ``interceptor_id``; unknown ids are ignored."""
        if 0 <= interceptor_id < len(self._entries):
            self._entries[interceptor_id] = None

    def clear(self) -> None:
        """Remove every entry and restart id allocation at 0."""
        self._entries = []

    def for_each(self, visit: Callable[[Interceptor[T]], None]) -> None:
        """Call ``visit`` for each live entry in insertion order."""
        for entry in self._entries:
            if entry is not None:
                visit(entry)

    def handlers(self) -> List[Interceptor[T]]:
        """Return a snapshot list of live entries in insertion order."""
        live: List[Interceptor[T]] = []
        self.for_each(live.append)
        return live

    def __len__(self) -> int:
        return sum(1 for entry in self._entries if entry is not None)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"InterceptorManager(slots={len(self._entries)}, live={len(self)})"


__all__ = ["InterceptorManager"]
