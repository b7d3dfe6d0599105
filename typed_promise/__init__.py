"""typed_promise package

A promise primitive with a typed failure channel and observable cancellation,
plus the HTTP glue that settles it from ``httpx`` responses.

Public API (re-exported):
    - Version: ``__version__``
    - Primitive: :class:`TypedPromise`, :class:`PromiseState`, :class:`Staged`
    - Errors: :class:`PromiseError`, :class:`CancelledError`,
      :class:`RejectedError`, :class:`UnobservedFailureError`, :class:`ErrorCode`
    - Deadlines: :func:`cancel_after`

HTTP helpers live in :mod:`typed_promise.http`.
"""

from .base.errors import (
    CancelledError,
    ErrorCode,
    PromiseError,
    RejectedError,
    UnobservedFailureError,
)
from .base.promise import NO_VALUE, PromiseState, Staged, TypedPromise
from .base.timeouts import cancel_after

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "TypedPromise",
    "PromiseState",
    "Staged",
    "NO_VALUE",
    "PromiseError",
    "CancelledError",
    "RejectedError",
    "UnobservedFailureError",
    "ErrorCode",
    "cancel_after",
]
