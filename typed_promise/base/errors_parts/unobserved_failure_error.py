"""Error raised when a failure is delivered with nobody listening."""

from __future__ import annotations

from typing import Any

from .promise_error import PromiseError


class UnobservedFailureError(PromiseError):
    """A domain failure reached a promise with no failure observer.

    Raised out of the reject entry point so an unobserved rejection is never
    silently dropped.

    Attributes:
        failure: The domain failure payload that went unobserved.
    """

    def __init__(self, failure: Any) -> None:
        super().__init__(f"unobserved promise failure: {failure!r}")
        self.failure = failure


__all__ = ["UnobservedFailureError"]
