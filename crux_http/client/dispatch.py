"""Adapter dispatch raced against a cancellation token.

Without a token the adapter is awaited directly. With one, the exchange and
``token.wait()`` run as sibling tasks and the first to settle decides the
outcome; the exchange wins ties. A cancellation that wins abandons the
exchange: the task keeps running, and its eventual outcome is consumed and
logged as ``exchange.abandoned`` at debug level.
"""
from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any

from ..base.logging import LogContext, normalized_log_event
from ..base.models import RequestConfig, Response


def _consume_abandoned(logger: logging.Logger, config: RequestConfig, task: "asyncio.Task[Any]") -> None:
    status = None
    error_code = None
    if task.cancelled():
        outcome = "cancelled"
    else:
        exc = task.exception()
        if exc is not None:
            outcome = "error"
            code = getattr(exc, "code", None)
            error_code = str(code) if code is not None else type(exc).__name__
        else:
            outcome = "response"
            status = getattr(task.result(), "status", None)
    normalized_log_event(
        logger,
        "exchange.abandoned",
        LogContext(method=config.method.value, url=config.url),
        phase="abandoned",
        status=status,
        error_code=error_code,
        level=logging.DEBUG,
        outcome=outcome,
    )


async def dispatch(adapter: Any, config: RequestConfig, logger: logging.Logger) -> Response:
    """Run ``adapter.request(config)``, racing it against ``config.cancel_token``."""
    token = config.cancel_token
    if token is None:
        return await adapter.request(config)

    exchange = asyncio.ensure_future(adapter.request(config))
    waiter = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({exchange, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        exchange.cancel()
        waiter.cancel()
        raise

    if exchange.done():
        waiter.cancel()
        return exchange.result()

    exchange.add_done_callback(partial(_consume_abandoned, logger, config))
    raise waiter.result().with_traceback(None)


__all__ = ["dispatch"]
