"""Hand-off from promise continuations to an ``asyncio`` future.

Settlement may happen on the loop thread (an asyncio callback) or on another
thread (a ``threading.Timer``); both paths end on the loop via
``call_soon_threadsafe`` unless already running there.
"""

from __future__ import annotations

import asyncio
from typing import Any

from ..errors import RejectedError


def failure_to_exception(failure: Any) -> BaseException:
    """Return the exception an awaiting caller should see for ``failure``."""
    if isinstance(failure, BaseException):
        return failure
    return RejectedError(failure)


def _on_loop(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


def deliver_result(loop: asyncio.AbstractEventLoop, future: asyncio.Future, value: Any) -> None:
    def _apply() -> None:
        if not future.done():
            future.set_result(value)

    if _on_loop(loop):
        _apply()
    else:
        loop.call_soon_threadsafe(_apply)


def deliver_exception(loop: asyncio.AbstractEventLoop, future: asyncio.Future, failure: Any) -> None:
    exc = failure_to_exception(failure)

    def _apply() -> None:
        if not future.done():
            future.set_exception(exc)

    if _on_loop(loop):
        _apply()
    else:
        loop.call_soon_threadsafe(_apply)


__all__ = ["failure_to_exception", "deliver_result", "deliver_exception"]
