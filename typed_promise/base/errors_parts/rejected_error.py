"""Carrier exception for non-exception failures delivered to awaiters."""

from __future__ import annotations

from typing import Any

from .promise_error import PromiseError


class RejectedError(PromiseError):
    """Raised by ``await`` when the promise was rejected with a plain value.

    Attributes:
        failure: The domain failure payload passed to the reject entry point.
    """

    def __init__(self, failure: Any) -> None:
        super().__init__(f"promise rejected: {failure!r}")
        self.failure = failure


__all__ = ["RejectedError"]
