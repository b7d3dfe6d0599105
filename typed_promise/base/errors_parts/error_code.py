"""
Normalized promise error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the promise core and the HTTP glue
when emitting structured log events. Values are lowercase snake_case and are
considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CANCELLED = "cancelled"
    REJECTED = "rejected"
    UNOBSERVED_FAILURE = "unobserved_failure"
    HANDLER_FAULT = "handler_fault"
    NETWORK = "network"
    HTTP = "http"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
