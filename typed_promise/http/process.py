"""Adapter from HTTP exchanges to ``TypedPromise`` settlement.

Each response is mapped to exactly one settlement call:

* 2xx: resolve with the JSON body, or the raw text when the body is not JSON;
* other statuses: reject with a :class:`ProblemJson`, parsed from an
  ``application/problem+json`` body when the server sent one;
* any failure before a response arrives: reject with
  ``ProblemJson(title="Network error", status=0)``.

``normalize_response`` / ``normalize_binary_response`` are the pure mapping;
``process_promise`` / ``process_promise_as_bytes`` drive an in-flight request
on the running loop and settle the promise they return. Observers registered
right after the call are in place before settlement, since the request runs
in a separate task.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Set

import httpx
from pydantic import ValidationError

from ..base.errors import classify_exception
from ..base.logging import LogContext, get_logger, log_event
from ..base.promise import TypedPromise
from ..config.defaults import PROBLEM_JSON_MEDIA_TYPE
from .problem import NETWORK_ERROR_STATUS, NO_RESPONSE_STATUS, BinaryPayload, ProblemJson

_LOGGER = get_logger("typed_promise.http")
# strong references so pending drive tasks are not garbage collected
_BACKGROUND: Set[asyncio.Task] = set()


@dataclass(frozen=True)
class ResponseOutcome:
    """Result of normalizing one response: which channel, and the payload."""

    ok: bool
    payload: Any


def _log_ctx(response: httpx.Response, label: Optional[str] = None) -> LogContext:
    try:
        request = response.request
    except RuntimeError:
        return LogContext(label=label)
    return LogContext(label=label, method=request.method, url=str(request.url))


def _media_type(response: httpx.Response) -> str:
    return response.headers.get("content-type", "").split(";")[0].strip().lower()


def _problem_from_body(response: httpx.Response, text: str) -> ProblemJson:
    status = response.status_code or NO_RESPONSE_STATUS
    if _media_type(response) != PROBLEM_JSON_MEDIA_TYPE:
        log_event(
            _LOGGER,
            "http.response.problem",
            _log_ctx(response),
            level=logging.WARNING,
            status=status,
            detail="server did not respond with problem+json",
        )
        return ProblemJson(status=status)

    try:
        raw = json.loads(text)
        if not isinstance(raw, dict):
            raise ValueError("problem document is not a JSON object")
        if not raw.get("status"):
            raw["status"] = status
        return ProblemJson.model_validate(raw)
    except (ValueError, ValidationError) as exc:
        log_event(
            _LOGGER,
            "http.response.malformed",
            _log_ctx(response),
            level=logging.WARNING,
            status=status,
            detail=str(exc),
        )
        return ProblemJson(status=status)


def normalize_response(response: httpx.Response) -> ResponseOutcome:
    """Map a received response to a JSON success or a ``ProblemJson`` failure."""
    if not response.is_success:
        return ResponseOutcome(False, _problem_from_body(response, response.text))
    try:
        return ResponseOutcome(True, response.json())
    except ValueError as exc:
        log_event(
            _LOGGER,
            "http.response.malformed",
            _log_ctx(response),
            level=logging.WARNING,
            status=response.status_code,
            detail=f"returning raw body: {exc}",
        )
        return ResponseOutcome(True, response.text)


def normalize_binary_response(response: httpx.Response) -> ResponseOutcome:
    """Map a received response to a ``BinaryPayload`` or a ``ProblemJson``."""
    if not response.is_success:
        text = response.content.decode("utf-8", errors="replace")
        return ResponseOutcome(False, _problem_from_body(response, text))
    return ResponseOutcome(
        True,
        BinaryPayload(buffer=response.content, content_type=response.headers.get("content-type", "")),
    )


def network_problem(exc: BaseException) -> ProblemJson:
    return ProblemJson(title="Network error", detail=str(exc), status=NETWORK_ERROR_STATUS)


async def _drive(
    request: Awaitable[httpx.Response],
    normalize: Callable[[httpx.Response], ResponseOutcome],
    ok: Callable[[Any], None],
    fail: Callable[[Any], None],
    label: Optional[str],
) -> None:
    # every failure before a response arrives settles as a status-0 rejection
    try:
        response = await request
    except Exception as exc:
        log_event(
            _LOGGER,
            "http.transport.error",
            LogContext(label=label),
            level=logging.WARNING,
            error_code=classify_exception(exc).value,
            error_type=type(exc).__name__,
            detail=str(exc),
        )
        fail(network_problem(exc))
        return

    outcome = normalize(response)
    if outcome.ok:
        ok(outcome.payload)
    else:
        fail(outcome.payload)


def _report(task: asyncio.Task) -> None:
    _BACKGROUND.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        log_event(
            _LOGGER,
            "http.settle.error",
            level=logging.ERROR,
            error_code=classify_exception(exc).value,
            detail=str(exc),
        )


def _spawn(
    request: Awaitable[httpx.Response],
    normalize: Callable[[httpx.Response], ResponseOutcome],
    label: Optional[str],
) -> TypedPromise:
    def producer(ok: Callable[[Any], None], fail: Callable[[Any], None]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(request):
                request.close()
            raise
        task = loop.create_task(_drive(request, normalize, ok, fail, label))
        _BACKGROUND.add(task)
        task.add_done_callback(_report)

    return TypedPromise(producer, label=label)


def process_promise(request: Awaitable[httpx.Response], *, label: Optional[str] = None) -> TypedPromise[Any, ProblemJson]:
    """Return a promise settled from the JSON outcome of ``request``.

    Must be called with a running event loop.
    """
    return _spawn(request, normalize_response, label)


def process_promise_as_bytes(
    request: Awaitable[httpx.Response], *, label: Optional[str] = None
) -> TypedPromise[BinaryPayload, ProblemJson]:
    """Like :func:`process_promise` but resolves with a ``BinaryPayload``."""
    return _spawn(request, normalize_binary_response, label)


__all__ = [
    "ResponseOutcome",
    "normalize_response",
    "normalize_binary_response",
    "network_problem",
    "process_promise",
    "process_promise_as_bytes",
]
