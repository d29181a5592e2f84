"""Interceptor entry stored by :class:`InterceptorManager`.

An entry pairs two optional handlers. Either may be a plain callable or return
an awaitable; the orchestrator awaits awaitables before moving to the next
entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")

SuccessHandler = Callable[[T], Union[T, Awaitable[T]]]
FailureHandler = Callable[[BaseException], Any]


@dataclass(frozen=True)
class Interceptor(Generic[T]):
    """A ``(on_success, on_failure)`` handler pair.

    Attributes:
        on_success: Receives the value flowing through the chain and returns
            the (possibly transformed) value.
        on_failure: Receives the failure raised upstream; returning normally
            recovers on the request chain (see ``HttpClient.request`` for the
            response-side contract).
    """

    on_success: Optional[SuccessHandler[T]] = None
    on_failure: Optional[FailureHandler] = None


__all__ = ["Interceptor", "SuccessHandler", "FailureHandler"]
