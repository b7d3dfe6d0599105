"""Base exception type for errors raised by the promise primitive."""

from __future__ import annotations


class PromiseError(Exception):
    """Root of the promise error hierarchy.

    Handler faults (exceptions raised inside a success observer) are never
    wrapped in this type; they propagate unchanged.
    """


__all__ = ["PromiseError"]
