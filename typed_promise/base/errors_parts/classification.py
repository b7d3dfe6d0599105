"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Used to tag structured log events. Promise errors map onto their own codes,
``httpx`` transport failures map to ``NETWORK`` and HTTP status errors to
``HTTP``. Anything else raised from inside a success observer is a handler
fault.
"""
from __future__ import annotations

import httpx

from .cancelled_error import CancelledError
from .error_code import ErrorCode
from .rejected_error import RejectedError
from .unobserved_failure_error import UnobservedFailureError


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. Promise error types.
        2. ``httpx`` transport errors (and ``OSError``).
        3. ``httpx`` status errors.
        4. ``HANDLER_FAULT`` for any other ``Exception``.
        5. ``UNKNOWN`` for non-``Exception`` base exceptions.
    """
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, UnobservedFailureError):
        return ErrorCode.UNOBSERVED_FAILURE
    if isinstance(exc, RejectedError):
        return ErrorCode.REJECTED
    if isinstance(exc, (httpx.TransportError, OSError)):
        return ErrorCode.NETWORK
    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCode.HTTP
    if isinstance(exc, Exception):
        return ErrorCode.HANDLER_FAULT
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
