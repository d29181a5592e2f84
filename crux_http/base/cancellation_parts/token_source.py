"""Token source pairing a ``CancelToken`` with its cancel function."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, NamedTuple, Optional

if TYPE_CHECKING:
    from .cancel_token import CancelToken


class CancelTokenSource(NamedTuple):
    """Pair returned by :meth:`CancelToken.source`.

    Attributes:
        token: Token to pass as ``cancel_token`` on request configurations.
        cancel: Function firing the token; accepts an optional message.
    """

    token: "CancelToken"
    cancel: Callable[[Optional[str]], None]


__all__ = ["CancelTokenSource"]
