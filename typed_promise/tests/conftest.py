"""Pytest configuration for the typed_promise test suite.

Provides a ``deferred`` factory that exposes a promise's settlement entry
points to the test, a ``log_records`` helper that parses the JSON lines
emitted on stderr, and resets the shared logger between tests so its handler
writes to the stream pytest is currently capturing.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, Iterator, List, Tuple

import pytest

from typed_promise.base.logging import LOG_LEVEL_ENV, get_logger
from typed_promise.base.promise import TypedPromise


@pytest.fixture(autouse=True)
def fresh_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Pin the base logger to INFO/JSON on the current stderr for each test."""

    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    get_logger(json_mode=True)
    yield


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_call(item: pytest.Item) -> None:
    """Re-point the base logger at the stderr pytest captures for the call phase."""

    get_logger(json_mode=True)


@pytest.fixture()
def deferred() -> Callable[..., Tuple[TypedPromise, SimpleNamespace]]:
    """Return a factory building a pending promise plus its ``ok``/``fail``."""

    def _make(**kwargs: Any) -> Tuple[TypedPromise, SimpleNamespace]:
        settle = SimpleNamespace()

        def producer(ok, fail):
            settle.ok = ok
            settle.fail = fail

        return TypedPromise(producer, **kwargs), settle

    return _make


@pytest.fixture()
def log_records(capsys: pytest.CaptureFixture[str]) -> Callable[[], List[Dict[str, Any]]]:
    """Return a callable yielding JSON log records written to stderr so far."""

    get_logger(json_mode=True)

    def _read() -> List[Dict[str, Any]]:
        err = capsys.readouterr().err
        return [json.loads(line) for line in err.splitlines() if line.strip()]

    return _read
