"""Cooperative cancellation token implementation.

Exposes the ``CancelToken`` class used by the request orchestrator to abort a
request before dispatch, or to win a race against an in-flight exchange.

The token is a one-shot cell: the first ``cancel`` call fixes a :class:`Cancel`
reason forever, wakes every coroutine awaiting :meth:`CancelToken.wait` and
then drains the pending listener list synchronously. Later ``cancel`` calls are
silent no-ops.

Waiters are kept apart from user listeners and are always resolved first, so a
listener that raises cannot keep :meth:`CancelToken.wait` from waking. Every
listener runs even when an earlier one raises; the first exception is
re-raised from ``cancel`` once all of them have been called.
"""

from __future__ import annotations

import asyncio
from threading import Lock
from typing import Callable, List, Optional, Tuple

from .cancel import Cancel
from .token_source import CancelTokenSource

CancelFunction = Callable[..., None]
Listener = Callable[[Cancel], None]
_Waiter = Tuple[asyncio.AbstractEventLoop, "asyncio.Future[Cancel]"]


def _resolve(future: "asyncio.Future[Cancel]", value: Cancel) -> None:
    if not future.done():
        future.set_result(value)


class CancelToken:
    """A one-shot, observable cancellation signal.

    Thread-safe for ``cancel`` + ``throw_if_requested`` usage. The executor
    receives the ``cancel(message=None)`` function synchronously during
    construction; most callers should use :meth:`source` instead.
    """

    def __init__(self, executor: Callable[[CancelFunction], None]) -> None:
        if not callable(executor):
            raise TypeError("executor must be a function.")
        self._reason: Optional[Cancel] = None
        self._listeners: List[Listener] = []
        self._waiters: List[_Waiter] = []
        self._lock = Lock()
        executor(self._cancel)

    @property
    def reason(self) -> Optional[Cancel]:  # noqa: D401 - short form
        """Fixed cancellation reason, or ``None`` while the token is pending."""
        return self._reason

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._reason is not None

    def _cancel(self, message: Optional[str] = None) -> None:
        with self._lock:
            if self._reason is not None:
                return
            reason = self._reason = Cancel(message)
            waiters, self._waiters = self._waiters, []
            listeners, self._listeners = self._listeners, []
        for loop, future in waiters:
            if not loop.is_closed():
                loop.call_soon_threadsafe(_resolve, future, reason)
        first_error: Optional[BaseException] = None
        for listener in listeners:
            try:
                listener(reason)
            except Exception as exc:  # noqa: BLE001 - re-raised after the drain
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def throw_if_requested(self) -> None:
        """Raise the fixed :class:`Cancel` reason if the token has fired."""
        reason = self._reason
        if reason is not None:
            raise reason.with_traceback(None)

    def subscribe(self, listener: Listener) -> None:
        """Invoke ``listener`` once with the reason, now or when the token fires."""
        with self._lock:
            reason = self._reason
            if reason is None:
                self._listeners.append(listener)
                return
        listener(reason)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a pending listener; unknown or already fired listeners are ignored."""
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                return

    async def wait(self) -> Cancel:
        """Suspend until the token fires and return its reason.

        The waiter is woken through ``call_soon_threadsafe`` so ``cancel`` may be
        called from any thread. The waiter is dropped when the awaiting task is
        itself cancelled.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Cancel] = loop.create_future()
        waiter: _Waiter = (loop, future)
        with self._lock:
            reason = self._reason
            if reason is not None:
                return reason
            self._waiters.append(waiter)
        try:
            return await future
        finally:
            with self._lock:
                if waiter in self._waiters:
                    self._waiters.remove(waiter)

    @classmethod
    def source(cls) -> CancelTokenSource:
        """Create a token together with its ``cancel`` function."""
        captured: List[CancelFunction] = []
        token = cls(captured.append)
        return CancelTokenSource(token=token, cancel=captured[0])

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancelToken(cancelled={self.cancelled}, "
            f"reason={self._reason!r}, listeners={len(self._listeners)})"
        )


__all__ = ["CancelToken", "CancelFunction", "Listener"]
