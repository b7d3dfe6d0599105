"""End-to-end scenarios combining registration timing with settlement."""
from __future__ import annotations

import asyncio
import time

from typed_promise import Staged, TypedPromise


def test_immediate_resolve_then_transform_then_cleanup():
    promise = TypedPromise(lambda ok, fail: ok(42))
    promise.on_success(lambda v: v + 1)

    assert promise.staged_value == Staged.of_value(43)  # nosec B101 - pytest assert in tests
    seen = []
    promise.on_cleanup(lambda v, e: seen.append((v, e)))
    assert seen == [(43, None)]  # nosec B101


def test_delayed_reject_reaches_failure_observer_once_at_delay():
    async def main():
        loop = asyncio.get_running_loop()
        start = time.perf_counter()
        promise = TypedPromise(lambda ok, fail: loop.call_later(0.1, fail, {"code": 418}))
        received = []
        promise.on_failure(lambda e: received.append((e, time.perf_counter() - start)))

        await asyncio.sleep(0.05)
        early = list(received)
        await asyncio.sleep(0.1)
        return early, received

    early, received = asyncio.run(main())

    assert early == []  # nosec B101
    assert len(received) == 1  # nosec B101
    failure, elapsed = received[0]
    assert failure == {"code": 418}  # nosec B101
    assert elapsed >= 0.09  # nosec B101


def test_delayed_resolve_with_recovery_and_cleanup():
    async def main():
        loop = asyncio.get_running_loop()
        promise = TypedPromise(lambda ok, fail: loop.call_later(0.05, ok, list(range(100))))
        events = []

        def on_ok(values):
            events.append(("ok", len(values)))
            raise ValueError(33)

        (
            promise.on_success(on_ok)
            .on_error(lambda e: events.append(("error", e.args[0])) or "catched")
            .on_cleanup(lambda v, e: events.append(("cleanup", len(v), e)))
        )
        await asyncio.sleep(0.1)
        return events

    assert asyncio.run(main()) == [("ok", 100), ("error", 33), ("cleanup", 100, "catched")]  # nosec B101
