"""Unit tests for the one-shot cancellation token.

Covers executor validation, reason stability across repeated cancel calls,
subscribe-before/after semantics, unsubscribe, ``wait`` and thread-safe
cancellation.
"""
from __future__ import annotations

import asyncio
import threading

import pytest

from crux_http.base.cancellation import Cancel, CancelToken, is_cancel


def test_non_callable_executor_raises_type_error():
    with pytest.raises(TypeError, match="executor must be a function."):
        CancelToken("nope")  # type: ignore[arg-type]


def test_executor_runs_synchronously_once():
    calls = []
    token = CancelToken(calls.append)
    assert len(calls) == 1  # nosec B101
    assert callable(calls[0])  # nosec B101
    assert token.cancelled is False  # nosec B101


def test_first_cancel_fixes_reason_forever():
    token, cancel = CancelToken.source()
    cancel("first")
    reason = token.reason
    cancel("second")

    assert isinstance(reason, Cancel)  # nosec B101
    assert reason.message == "first"  # nosec B101
    assert token.reason is reason  # nosec B101
    assert str(reason) == "Cancel: first"  # nosec B101
    assert reason.code == "ERR_CANCELED"  # nosec B101


def test_throw_if_requested_raises_same_reason_every_time():
    token, cancel = CancelToken.source()
    token.throw_if_requested()  # pending: no-op
    cancel()
    raised = []
    for _ in range(2):
        with pytest.raises(Cancel) as info:
            token.throw_if_requested()
        raised.append(info.value)
    assert raised[0] is raised[1] is token.reason  # nosec B101
    assert str(raised[0]) == "Cancel"  # nosec B101


def test_subscribe_before_cancel_notifies_once():
    token, cancel = CancelToken.source()
    seen = []
    token.subscribe(seen.append)
    cancel("stop")
    cancel("again")
    assert seen == [token.reason]  # nosec B101


def test_subscribe_after_cancel_invokes_immediately():
    token, cancel = CancelToken.source()
    cancel("done")
    seen = []
    token.subscribe(seen.append)
    assert seen == [token.reason]  # nosec B101


def test_unsubscribe_removes_pending_listener_and_ignores_unknown():
    token, cancel = CancelToken.source()
    seen = []
    token.subscribe(seen.append)
    token.unsubscribe(seen.append)
    token.unsubscribe(print)
    cancel()
    assert seen == []  # nosec B101


def test_wait_resolves_when_cancelled_later():
    async def main():
        token, cancel = CancelToken.source()
        loop = asyncio.get_running_loop()
        loop.call_later(0.01, cancel, "later")
        return await token.wait(), token

    reason, token = asyncio.run(main())
    assert reason is token.reason  # nosec B101
    assert reason.message == "later"  # nosec B101


def test_wait_returns_immediately_when_already_cancelled():
    token, cancel = CancelToken.source()
    cancel()
    assert asyncio.run(token.wait()) is token.reason  # nosec B101


def test_cancel_from_another_thread_wakes_waiter():
    async def main():
        token, cancel = CancelToken.source()
        thread = threading.Timer(0.02, cancel, args=("thread",))
        thread.start()
        try:
            return await asyncio.wait_for(token.wait(), timeout=2)
        finally:
            thread.join()

    reason = asyncio.run(main())
    assert reason.message == "thread"  # nosec B101


def test_is_cancel_only_accepts_cancel_instances():
    assert is_cancel(Cancel("x"))  # nosec B101
    assert not is_cancel(RuntimeError("x"))  # nosec B101
    assert not is_cancel(None)  # nosec B101


def test_raising_listener_does_not_stop_later_listeners_or_waiters():
    async def main():
        token, cancel = CancelToken.source()
        seen = []

        def bad(reason):
            seen.append("bad")
            raise RuntimeError("listener failed")

        token.subscribe(bad)
        token.subscribe(lambda reason: seen.append("good"))
        waiter = asyncio.ensure_future(token.wait())
        await asyncio.sleep(0)
        with pytest.raises(RuntimeError, match="listener failed"):
            cancel("stop")
        reason = await asyncio.wait_for(waiter, timeout=1)
        return seen, reason, token

    seen, reason, token = asyncio.run(main())
    assert seen == ["bad", "good"]  # nosec B101
    assert reason is token.reason  # nosec B101
