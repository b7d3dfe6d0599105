"""``await`` integration: values, typed failures and cancellation signals."""
from __future__ import annotations

import asyncio
import threading
import time

import pytest

from typed_promise import CancelledError, PromiseError, RejectedError, TypedPromise, UnobservedFailureError

TEST_TIME = 0.1


def _delayed(kind, payload, delay=TEST_TIME):
    def producer(ok, fail):
        loop = asyncio.get_running_loop()
        loop.call_later(delay, ok if kind == "ok" else fail, payload)

    return producer


def test_await_returns_resolved_value_after_delay():
    async def main():
        promise = TypedPromise(_delayed("ok", 418))
        start = time.perf_counter()
        value = await promise
        return value, time.perf_counter() - start

    value, took = asyncio.run(main())

    assert value == 418  # nosec B101 - pytest assert in tests
    assert took >= TEST_TIME - 0.02  # nosec B101


def test_await_already_resolved_promise():
    async def main():
        return await TypedPromise(lambda ok, fail: ok("now"))

    assert asyncio.run(main()) == "now"  # nosec B101


def test_await_rejection_with_plain_value_raises_rejected_error():
    async def main():
        await TypedPromise(_delayed("fail", 418))

    with pytest.raises(RejectedError) as info:
        asyncio.run(main())

    assert info.value.failure == 418  # nosec B101
    assert isinstance(info.value, PromiseError)  # nosec B101


def test_await_rejection_with_exception_raises_it_directly():
    failure = LookupError("missing")

    async def main():
        await TypedPromise(_delayed("fail", failure))

    with pytest.raises(LookupError) as info:
        asyncio.run(main())

    assert info.value is failure  # nosec B101


def test_await_already_rejected_promise(deferred):
    promise, settle = deferred()
    with pytest.raises(UnobservedFailureError):
        settle.fail({"code": 418})

    async def main():
        await promise

    with pytest.raises(RejectedError) as info:
        asyncio.run(main())

    assert info.value.failure == {"code": 418}  # nosec B101


def test_await_cancelled_promise_raises_cancellation_signal():
    cancelled = []

    async def main():
        promise = TypedPromise(_delayed("fail", 418))
        promise.on_cancelled(lambda: cancelled.append(True))
        promise.cancel()
        await promise

    with pytest.raises(CancelledError) as info:
        asyncio.run(main())

    assert info.value.cancelled is True  # nosec B101
    assert cancelled == [True]  # nosec B101


def test_await_cancellation_is_catchable_inside_coroutine():
    async def main():
        promise = TypedPromise(_delayed("ok", 1))
        promise.cancel()
        try:
            await promise
        except CancelledError as exc:
            return exc.cancelled
        return False

    assert asyncio.run(main()) is True  # nosec B101


def test_await_after_cancelled_settlement_landed(deferred):
    promise, settle = deferred()
    promise.cancel()
    settle.ok(1)

    async def main():
        await promise

    with pytest.raises(CancelledError):
        asyncio.run(main())


def test_await_settlement_from_another_thread():
    async def main():
        promise = TypedPromise(lambda ok, fail: threading.Timer(TEST_TIME, ok, args=("threaded",)).start())
        return await promise

    assert asyncio.run(main()) == "threaded"  # nosec B101


def test_repeated_awaits_resolve_in_sequence():
    async def main():
        values = []
        for i in range(3):
            values.append(await TypedPromise(_delayed("ok", i, delay=0.01)))
        return values

    assert asyncio.run(main()) == [0, 1, 2]  # nosec B101


def test_concurrent_second_await_takes_over_and_warns(deferred, log_records):
    promise, settle = deferred(label="shared")

    async def wait_for_value():
        return await promise

    async def main():
        first = asyncio.ensure_future(wait_for_value())
        second = asyncio.ensure_future(wait_for_value())
        await asyncio.sleep(0)
        settle.ok(7)
        value = await asyncio.wait_for(second, timeout=1)
        await asyncio.sleep(TEST_TIME)
        first_still_waiting = not first.done()
        first.cancel()
        return value, first_still_waiting

    value, first_still_waiting = asyncio.run(main())

    assert value == 7 and first_still_waiting  # nosec B101
    replaced = [r for r in log_records() if r.get("event") == "promise.await.replaced"]
    assert len(replaced) == 1 and replaced[0]["level"] == "WARNING"  # nosec B101
    assert replaced[0]["label"] == "shared" and replaced[0]["state"] == "pending"  # nosec B101


def test_sequential_awaits_of_settled_promise_do_not_warn(log_records):
    promise = TypedPromise(lambda ok, fail: ok("done"))

    async def main():
        return [await promise, await promise]

    assert asyncio.run(main()) == ["done", "done"]  # nosec B101
    assert "promise.await.replaced" not in [r.get("event") for r in log_records()]  # nosec B101
