"""Promise parts package: state machine pieces behind ``TypedPromise``."""

from .state import PromiseState
from .staged import NO_VALUE, Staged, StagedKind
from .context import OutcomeContext
from .transitions import Effect, SettlementEvent, Transition, transition
from .typed_promise import TypedPromise

__all__ = [
    "PromiseState",
    "NO_VALUE",
    "Staged",
    "StagedKind",
    "OutcomeContext",
    "Effect",
    "SettlementEvent",
    "Transition",
    "transition",
    "TypedPromise",
]
