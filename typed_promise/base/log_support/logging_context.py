"""Structured logging context object for promise events.

This module defines :class:`LogContext`, a dataclass carrying the fields shared
by every event emitted for one promise (its label and identity, plus the HTTP
method/url when the promise wraps a request). ``to_dict`` merges the ``extra``
mapping and prunes ``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for promise logging events."""

    promise_id: Optional[str] = None
    label: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
