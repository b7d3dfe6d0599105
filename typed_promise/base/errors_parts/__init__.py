"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `typed_promise.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .promise_error import PromiseError
from .cancelled_error import CancelledError
from .rejected_error import RejectedError
from .unobserved_failure_error import UnobservedFailureError
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "PromiseError",
    "CancelledError",
    "RejectedError",
    "UnobservedFailureError",
    "classify_exception",
]
