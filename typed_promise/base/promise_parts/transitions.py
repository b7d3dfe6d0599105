"""Pure transition table for the promise state machine.

``transition(state, event, ...)`` returns the next state and the ordered
effects the façade must run. It has no side effects and no notion of time, so
every row of the table is testable in isolation.

========================  ==============  ==========  ===================================================
state                     event           next        effects
========================  ==============  ==========  ===================================================
pending                   resolve         resolved    STORE_VALUE, RUN_SUCCESS, RUN_CLEANUP
pending                   reject          rejected    STORE_ERROR, RUN_FAILURE, RUN_CLEANUP
pending                   cancel          cancelled   (none)
cancelled (not landed)    resolve/reject  cancelled   NOTIFY_CANCELLED [, SIGNAL_AWAITER when awaited]
cancelled (landed)        resolve/reject  cancelled   IGNORE
resolved / rejected       resolve/reject  unchanged   IGNORE
any terminal              cancel          unchanged   (none)
========================  ==============  ==========  ===================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .state import PromiseState


class SettlementEvent(str, Enum):
    RESOLVE = "resolve"
    REJECT = "reject"
    CANCEL = "cancel"


class Effect(str, Enum):
    STORE_VALUE = "store_value"
    RUN_SUCCESS = "run_success"
    STORE_ERROR = "store_error"
    RUN_FAILURE = "run_failure"
    RUN_CLEANUP = "run_cleanup"
    NOTIFY_CANCELLED = "notify_cancelled"
    SIGNAL_AWAITER = "signal_awaiter"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Transition:
    """Result of applying one event: next state plus effects, in order."""

    state: PromiseState
    effects: Tuple[Effect, ...] = ()

    @property
    def ignored(self) -> bool:
        return Effect.IGNORE in self.effects


_RESOLVE_EFFECTS = (Effect.STORE_VALUE, Effect.RUN_SUCCESS, Effect.RUN_CLEANUP)
_REJECT_EFFECTS = (Effect.STORE_ERROR, Effect.RUN_FAILURE, Effect.RUN_CLEANUP)


def transition(
    state: PromiseState,
    event: SettlementEvent,
    *,
    awaited: bool = False,
    landed: bool = False,
) -> Transition:
    """Compute the transition for ``event`` applied in ``state``.

    Args:
        state: Current lifecycle state.
        event: Incoming event.
        awaited: Whether the promise is being consumed by ``await``.
        landed: Whether a settlement call was already processed.
    """
    if event is SettlementEvent.CANCEL:
        if state is PromiseState.PENDING:
            return Transition(PromiseState.CANCELLED)
        return Transition(state)

    if state is PromiseState.PENDING:
        if event is SettlementEvent.RESOLVE:
            return Transition(PromiseState.RESOLVED, _RESOLVE_EFFECTS)
        return Transition(PromiseState.REJECTED, _REJECT_EFFECTS)

    if state is PromiseState.CANCELLED and not landed:
        if awaited:
            return Transition(state, (Effect.NOTIFY_CANCELLED, Effect.SIGNAL_AWAITER))
        return Transition(state, (Effect.NOTIFY_CANCELLED,))

    return Transition(state, (Effect.IGNORE,))


__all__ = ["SettlementEvent", "Effect", "Transition", "transition"]
