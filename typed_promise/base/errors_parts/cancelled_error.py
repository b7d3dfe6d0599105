"""Cancellation signal type.

Defines the ``CancelledError`` surfaced to ``await`` consumers when a
settlement lands on a cancelled promise. Kept isolated to satisfy the
one-class-per-file policy.
"""

from __future__ import annotations

from .promise_error import PromiseError


class CancelledError(PromiseError):
    """Raised to an awaiting caller when the awaited promise was cancelled.

    Distinct from ``asyncio.CancelledError``: this is an ordinary ``Exception``
    so it can be caught by the awaiting code's normal ``try``/``except``
    without interfering with task cancellation.
    """

    cancelled = True

    def __init__(self, message: str = "promise cancelled") -> None:
        super().__init__(message)


__all__ = ["CancelledError"]
