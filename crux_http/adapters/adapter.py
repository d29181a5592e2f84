"""Adapter Protocol (single-class module).

Defines the transport contract consumed by the request orchestrator: perform
one HTTP exchange for a normalized ``RequestConfig``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..base.models import RequestConfig, Response


@runtime_checkable
class Adapter(Protocol):
    """Minimal interface for transport adapters.

    Implementations resolve the URL, encode the body, perform the exchange
    and decode the response. They raise :class:`TransportError` for
    connection-level failures and :class:`StatusError` when
    ``config.validate_status`` rejects the status. Status classification is
    never performed by the orchestrator.
    """

    async def request(self, config: RequestConfig) -> Response:
        """Execute one exchange and return the normalized response."""
        ...
