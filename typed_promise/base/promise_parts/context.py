"""Per-instance outcome context.

``OutcomeContext`` is the mutable record behind one ``TypedPromise``. It is
owned exclusively by the façade and mutated only by the settlement entry
points, the registration calls and ``cancel()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .staged import NO_VALUE, Staged
from .state import PromiseState

OkType = TypeVar("OkType")
FailType = TypeVar("FailType")


@dataclass
class OutcomeContext(Generic[OkType, FailType]):
    """Lifecycle state, settled payload, observers and staging slots.

    Attributes:
        state: Current lifecycle state.
        value: Resolved value (meaningful only when ``RESOLVED``).
        error: Failure payload (meaningful only when ``REJECTED``).
        success_observer: Pending success callback (one; last write wins).
        failure_observer: Pending failure callback.
        error_observer: Recovery callback for handler faults.
        cancelled_observer: Callback for settlement landing on ``CANCELLED``.
        cleanup_observer: Finalization callback ``(last_value, last_error)``.
        awaited: Set once the promise is consumed by ``await``.
        settlement_landed: A settlement call has been processed.
        transform_result: Staged success value handed to cleanup.
        recovered_error: Staged failure / handler fault handed to cleanup.
    """

    state: PromiseState = PromiseState.PENDING
    value: Optional[OkType] = None
    error: Optional[FailType] = None
    success_observer: Optional[Callable[[Any], Any]] = None
    failure_observer: Optional[Callable[[Any], Any]] = None
    error_observer: Optional[Callable[[Exception], Any]] = None
    cancelled_observer: Optional[Callable[[], Any]] = None
    cleanup_observer: Optional[Callable[[Any, Any], Any]] = None
    awaited: bool = False
    settlement_landed: bool = False
    transform_result: Staged = NO_VALUE
    recovered_error: Staged = NO_VALUE


__all__ = ["OutcomeContext", "OkType", "FailType"]
