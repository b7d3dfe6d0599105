"""Deadline helper for promises.

Promises carry no built-in timeout. ``cancel_after`` composes one on the
running ``asyncio`` loop: when the delay elapses the promise is cancelled, so
its eventual settlement is reported as cancellation. Cancelling the returned
handle disarms the deadline.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from .promise_parts.typed_promise import TypedPromise


def cancel_after(
    promise: TypedPromise,
    seconds: float,
    *,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> asyncio.TimerHandle:
    """Schedule ``promise.cancel()`` after ``seconds`` on ``loop``.

    Defaults to the running loop; raises ``RuntimeError`` when there is none.
    A non-positive delay cancels on the next loop iteration.
    """
    target = loop if loop is not None else asyncio.get_running_loop()
    return target.call_later(max(seconds, 0.0), promise.cancel)


__all__ = ["cancel_after"]
