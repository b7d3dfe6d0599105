"""The ``TypedPromise`` façade.

A promise with a typed failure channel and observable cancellation. The
producer passed at construction is invoked immediately with the two
settlement entry points ``(resolve, reject)`` and is expected to call at most
one of them, once, now or later.

Observers are registered per role (success, failure, error recovery,
cancellation, cleanup). Each role holds a single callback: registering a role
again before settlement replaces the previous callback. A role registered
after the matching settlement fires immediately.

Three error channels are kept apart:

* domain failures (``FailType``) go to ``on_failure``;
* handler faults (exceptions raised by the success observer) go to
  ``on_error``, or propagate when none is registered;
* cancellation goes to ``on_cancelled`` and, for awaiting callers, surfaces as
  :class:`~typed_promise.base.errors.CancelledError`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Generator, Generic, Optional

from ..errors import CancelledError, ErrorCode, UnobservedFailureError, classify_exception
from ..logging import LogContext, get_logger, log_event
from .await_bridge import deliver_exception, deliver_result
from .context import FailType, OkType, OutcomeContext
from .staged import Staged
from .state import PromiseState
from .transitions import Effect, SettlementEvent, transition

Resolve = Callable[[Any], None]
Reject = Callable[[Any], None]
Producer = Callable[[Resolve, Reject], Any]

_LOGGER = get_logger("typed_promise.promise")


class TypedPromise(Generic[OkType, FailType]):
    """Single-outcome promise with typed failures and cancellation.

    Example:
        >>> p = TypedPromise(lambda ok, fail: ok(42))
        >>> p.on_success(lambda v: v + 1).staged_value.payload
        43
    """

    def __init__(self, producer: Producer, *, label: Optional[str] = None) -> None:
        self._context: OutcomeContext[OkType, FailType] = OutcomeContext()
        self._log_ctx = LogContext(promise_id=f"{id(self):x}", label=label)
        # exceptions raised by the producer itself propagate to the caller
        producer(self._resolve, self._reject)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def state(self) -> PromiseState:
        return self._context.state

    @property
    def cancelled(self) -> bool:
        return self._context.state is PromiseState.CANCELLED

    @property
    def done(self) -> bool:
        """Whether the outcome is final (settled, or cancelled and landed)."""
        ctx = self._context
        if ctx.state is PromiseState.CANCELLED:
            return ctx.settlement_landed
        return ctx.state.terminal

    @property
    def staged_value(self) -> Staged:
        """Value that cleanup receives as ``last_value``."""
        return self._context.transform_result

    @property
    def staged_error(self) -> Staged:
        """Error that cleanup receives as ``last_error``."""
        return self._context.recovered_error

    # ------------------------------------------------------------------
    # Registration surface
    # ------------------------------------------------------------------
    def on_success(self, callback: Callable[[OkType], Any]) -> "TypedPromise[OkType, FailType]":
        """Observe the resolved value.

        When already resolved the callback runs now with the staged value; a
        non-``None`` return replaces it. A raised exception goes to the
        ``on_error`` observer, or is re-raised here when there is none.
        """
        if self._context.state is PromiseState.RESOLVED:
            self._run_success(callback)
        else:
            self._context.success_observer = callback
        return self

    def on_failure(self, callback: Callable[[FailType], Any]) -> "TypedPromise[OkType, FailType]":
        """Observe a domain failure. Never called for handler faults."""
        if self._context.state is PromiseState.REJECTED:
            callback(self._context.error)
        else:
            self._context.failure_observer = callback
        return self

    def on_error(self, callback: Callable[[Exception], Any]) -> "TypedPromise[OkType, FailType]":
        """Register recovery for exceptions raised by the success observer.

        The callback's return value becomes the ``last_error`` seen by cleanup.
        """
        self._context.error_observer = callback
        return self

    def on_cancelled(self, callback: Callable[[], Any]) -> "TypedPromise[OkType, FailType]":
        """Observe a settlement that lands on a cancelled promise."""
        ctx = self._context
        if ctx.state is PromiseState.CANCELLED and ctx.settlement_landed:
            callback()
        else:
            ctx.cancelled_observer = callback
        return self

    def on_cleanup(self, callback: Callable[[Any, Any], Any]) -> "TypedPromise[OkType, FailType]":
        """Run ``callback(last_value, last_error)`` once the outcome is final.

        ``last_value`` is the staged success value (``None`` when rejected);
        ``last_error`` is the failure, the recovered handler fault, or ``None``.
        Never called for a cancelled promise.
        """
        if self._context.state in (PromiseState.RESOLVED, PromiseState.REJECTED):
            self._call_cleanup(callback)
        else:
            self._context.cleanup_observer = callback
        return self

    def cancel(self) -> None:
        """Mark a pending promise cancelled.

        The producer keeps running; its eventual settlement is reported to
        ``on_cancelled`` instead of the success/failure observers.
        """
        ctx = self._context
        step = transition(ctx.state, SettlementEvent.CANCEL)
        if step.state is ctx.state:
            return
        ctx.state = step.state
        log_event(_LOGGER, "promise.cancel", self._log_ctx, level=logging.DEBUG)

    # ------------------------------------------------------------------
    # Await bridge
    # ------------------------------------------------------------------
    def _then(self, on_ok: Callable[[Any], Any], on_fail: Optional[Callable[[Any], Any]] = None) -> None:
        ctx = self._context
        if ctx.awaited and not self.done:
            # one continuation per role: the earlier awaiter is never woken
            log_event(
                _LOGGER,
                "promise.await.replaced",
                self._log_ctx,
                level=logging.WARNING,
                state=ctx.state.value,
            )
        ctx.awaited = True
        if ctx.state is PromiseState.RESOLVED:
            self._run_success(on_ok)
        else:
            ctx.success_observer = on_ok
        if on_fail is None:
            return
        if ctx.state is PromiseState.REJECTED:
            on_fail(ctx.error)
        elif ctx.state is PromiseState.CANCELLED and ctx.settlement_landed:
            on_fail(CancelledError())
        else:
            ctx.failure_observer = on_fail

    def __await__(self) -> Generator[Any, None, OkType]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()
        self._then(
            lambda value: deliver_result(loop, future, value),
            lambda failure: deliver_exception(loop, future, failure),
        )
        return (yield from future.__await__())

    # ------------------------------------------------------------------
    # Settlement entry points
    # ------------------------------------------------------------------
    def _resolve(self, value: OkType) -> None:
        self._settle(SettlementEvent.RESOLVE, value)

    def _reject(self, failure: FailType) -> None:
        self._settle(SettlementEvent.REJECT, failure)

    def _settle(self, event: SettlementEvent, payload: Any) -> None:
        ctx = self._context
        step = transition(ctx.state, event, awaited=ctx.awaited, landed=ctx.settlement_landed)
        if step.ignored:
            log_event(
                _LOGGER,
                "promise.settle.ignored",
                self._log_ctx,
                level=logging.WARNING,
                state=ctx.state.value,
                attempted=event.value,
            )
            return

        ctx.state = step.state
        ctx.settlement_landed = True
        try:
            for effect in step.effects:
                if effect is not Effect.RUN_CLEANUP:
                    self._apply(effect, payload)
        finally:
            if Effect.RUN_CLEANUP in step.effects and ctx.cleanup_observer is not None:
                self._call_cleanup(ctx.cleanup_observer)

    def _apply(self, effect: Effect, payload: Any) -> None:
        ctx = self._context
        if effect is Effect.STORE_VALUE:
            ctx.value = payload
            ctx.transform_result = Staged.of_value(payload)
        elif effect is Effect.RUN_SUCCESS:
            if ctx.success_observer is not None:
                self._run_success(ctx.success_observer)
        elif effect is Effect.STORE_ERROR:
            ctx.error = payload
            ctx.recovered_error = Staged.of_error(payload)
        elif effect is Effect.RUN_FAILURE:
            if ctx.failure_observer is None:
                log_event(
                    _LOGGER,
                    "promise.failure.unobserved",
                    self._log_ctx,
                    level=logging.ERROR,
                    error_code=ErrorCode.UNOBSERVED_FAILURE.value,
                    failure=payload,
                )
                if isinstance(payload, BaseException):
                    raise UnobservedFailureError(payload) from payload
                raise UnobservedFailureError(payload)
            ctx.failure_observer(payload)
        elif effect is Effect.NOTIFY_CANCELLED:
            if ctx.cancelled_observer is not None:
                ctx.cancelled_observer()
        elif effect is Effect.SIGNAL_AWAITER:
            if ctx.failure_observer is not None:
                ctx.failure_observer(CancelledError())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _run_success(self, callback: Callable[[Any], Any]) -> None:
        ctx = self._context
        try:
            result = callback(ctx.transform_result.unwrap())
        except Exception as exc:
            self._recover(exc)
        else:
            if result is not None:
                ctx.transform_result = Staged.of_value(result)

    def _recover(self, fault: Exception) -> None:
        ctx = self._context
        recovered = ctx.error_observer is not None
        log_event(
            _LOGGER,
            "promise.handler.fault",
            self._log_ctx,
            level=logging.WARNING if recovered else logging.ERROR,
            error_code=classify_exception(fault).value,
            recovered=recovered,
            detail=str(fault),
        )
        if ctx.error_observer is None:
            ctx.recovered_error = Staged.of_error(fault)
            raise fault
        ctx.recovered_error = Staged.of_error(ctx.error_observer(fault))

    def _call_cleanup(self, callback: Callable[[Any, Any], Any]) -> None:
        ctx = self._context
        callback(ctx.transform_result.unwrap(), ctx.recovered_error.unwrap())

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        ctx = self._context
        return (
            f"TypedPromise(state={ctx.state.value!r}, awaited={ctx.awaited}, "
            f"label={self._log_ctx.label!r})"
        )


__all__ = ["TypedPromise", "Producer", "Resolve", "Reject"]
