"""Typed promise primitive (public API facade).

Purpose
-------
Expose the promise primitive via the canonical ``typed_promise.base.promise``
import path while the concrete implementations live under ``promise_parts``.

Notes
-----
- ``TypedPromise`` is the façade: registration surface, settlement entry
  points and ``await`` support.
- ``transition`` is the pure state table the façade executes; it is exported
  so the table can be inspected and tested without timing concerns.
- ``Staged`` is the tagged variant handed to cleanup observers.
"""

from .promise_parts.state import PromiseState
from .promise_parts.staged import NO_VALUE, Staged, StagedKind
from .promise_parts.context import OutcomeContext
from .promise_parts.transitions import Effect, SettlementEvent, Transition, transition
from .promise_parts.typed_promise import Producer, TypedPromise

__all__ = [
    "TypedPromise",
    "Producer",
    "PromiseState",
    "OutcomeContext",
    "Staged",
    "StagedKind",
    "NO_VALUE",
    "Effect",
    "SettlementEvent",
    "Transition",
    "transition",
]
