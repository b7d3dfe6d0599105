"""Unified promise error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``typed_promise.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.promise_error import PromiseError
from .errors_parts.cancelled_error import CancelledError
from .errors_parts.rejected_error import RejectedError
from .errors_parts.unobserved_failure_error import UnobservedFailureError
from .errors_parts.classification import classify_exception

__all__ = [
    "ErrorCode",
    "PromiseError",
    "CancelledError",
    "RejectedError",
    "UnobservedFailureError",
    "classify_exception",
]
