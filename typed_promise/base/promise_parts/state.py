"""Lifecycle states of a promise."""

from __future__ import annotations

from enum import Enum


class PromiseState(str, Enum):
    """Lifecycle state of a single promise.

    ``PENDING`` is the only non-terminal state. ``cancel()`` may move it to
    ``CANCELLED``; settlement moves it to ``RESOLVED`` or ``REJECTED``.
    """

    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self is not PromiseState.PENDING


__all__ = ["PromiseState"]
