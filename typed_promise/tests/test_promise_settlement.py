"""Settlement paths: handler faults, recovery, cleanup and unobserved failures."""
from __future__ import annotations

import pytest

from typed_promise import PromiseState, Staged, TypedPromise, UnobservedFailureError


class Boom(Exception):
    pass


def _raise(exc):
    def _cb(_value):
        raise exc

    return _cb


def test_producer_exception_propagates_from_constructor():
    def producer(ok, fail):
        raise Boom("producer")

    with pytest.raises(Boom):
        TypedPromise(producer)


def test_handler_fault_is_recovered_by_on_error(deferred):
    promise, settle = deferred()
    fault = Boom("test")
    recovered = []

    promise.on_success(_raise(fault)).on_error(lambda e: recovered.append(e) or "caught")
    settle.ok(418)

    assert recovered == [fault]  # nosec B101 - pytest assert in tests
    assert promise.staged_error == Staged.of_error("caught")  # nosec B101


def test_cleanup_sees_original_value_and_recovered_error(deferred):
    promise, settle = deferred()
    seen = []

    (
        promise.on_success(_raise(Boom("test")))
        .on_error(lambda e: "caught")
        .on_cleanup(lambda v, e: seen.append((v, e)))
    )
    settle.ok(418)

    assert seen == [(418, "caught")]  # nosec B101


def test_handler_fault_without_recovery_propagates_to_settlement_call_site(deferred):
    promise, settle = deferred()
    fault = Boom("unhandled")
    seen = []
    promise.on_success(_raise(fault)).on_cleanup(lambda v, e: seen.append((v, e)))

    with pytest.raises(Boom) as info:
        settle.ok(1)

    assert info.value is fault  # nosec B101
    # cleanup still ran before the fault escaped
    assert seen == [(1, fault)]  # nosec B101
    assert promise.state is PromiseState.RESOLVED  # nosec B101


def test_handler_fault_at_registration_is_reraised_without_recovery():
    promise = TypedPromise(lambda ok, fail: ok(1))

    with pytest.raises(Boom):
        promise.on_success(_raise(Boom("late")))

    assert promise.staged_error.is_error  # nosec B101


def test_handler_fault_at_registration_goes_to_registered_recovery():
    promise = TypedPromise(lambda ok, fail: ok(1))
    recovered = []

    promise.on_error(recovered.append).on_success(_raise(Boom("late")))

    assert len(recovered) == 1 and isinstance(recovered[0], Boom)  # nosec B101


def test_cleanup_after_clean_resolution(deferred):
    promise, settle = deferred()
    seen = []
    promise.on_success(lambda v: v * 2).on_cleanup(lambda v, e: seen.append((v, e)))

    settle.ok(21)

    assert seen == [(42, None)]  # nosec B101


def test_cleanup_after_rejection(deferred):
    promise, settle = deferred()
    seen = []
    promise.on_success(lambda v: v).on_failure(lambda e: None).on_cleanup(lambda v, e: seen.append((v, e)))

    settle.fail(418)

    assert seen == [(None, 418)]  # nosec B101


def test_unobserved_failure_raises_and_still_runs_cleanup(deferred):
    promise, settle = deferred()
    seen = []
    promise.on_cleanup(lambda v, e: seen.append((v, e)))

    with pytest.raises(UnobservedFailureError) as info:
        settle.fail({"status": 500})

    assert info.value.failure == {"status": 500}  # nosec B101
    assert seen == [(None, {"status": 500})]  # nosec B101


def test_unobserved_exception_failure_is_chained():
    cause = Boom("domain")

    with pytest.raises(UnobservedFailureError) as info:
        TypedPromise(lambda ok, fail: fail(cause))

    assert info.value.__cause__ is cause  # nosec B101


def test_failure_observer_is_not_called_for_handler_faults(deferred):
    promise, settle = deferred()
    failures = []
    promise.on_success(_raise(Boom())).on_error(lambda e: None).on_failure(failures.append)

    settle.ok(1)

    assert failures == []  # nosec B101


def test_second_resolve_is_ignored_and_logged(deferred, log_records):
    promise, settle = deferred(label="double")
    calls = []
    promise.on_success(calls.append)

    settle.ok("first")
    settle.ok("second")

    assert calls == ["first"]  # nosec B101
    assert promise.staged_value.payload == "first"  # nosec B101
    ignored = [r for r in log_records() if r.get("event") == "promise.settle.ignored"]
    assert len(ignored) == 1  # nosec B101
    assert ignored[0]["level"] == "WARNING"  # nosec B101
    assert ignored[0]["label"] == "double" and ignored[0]["attempted"] == "resolve"  # nosec B101


def test_reject_after_resolve_is_ignored(deferred):
    promise, settle = deferred()
    failures, cleanups = [], []
    promise.on_failure(failures.append).on_cleanup(lambda v, e: cleanups.append((v, e)))

    settle.ok(1)
    settle.fail(2)

    assert failures == []  # nosec B101
    assert cleanups == [(1, None)]  # nosec B101
    assert promise.state is PromiseState.RESOLVED  # nosec B101
