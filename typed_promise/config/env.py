"""typed_promise.config.env
=========================

Environment variable names and parsing helpers.

Failure Modes
-------------
Helpers never raise on unset or malformed variables; they return the supplied
default so a bad value degrades to the built-in configuration.
"""

from __future__ import annotations

import os
from typing import Optional

BASE_URL_ENV = "TYPED_PROMISE_BASE_URL"
HTTP_TIMEOUT_ENV = "TYPED_PROMISE_HTTP_TIMEOUT_SECONDS"
LOG_LEVEL_ENV = "TYPED_PROMISE_LOG_LEVEL"
JSON_LOGS_ENV = "TYPED_PROMISE_JSON_LOGS"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Return the stripped value of ``name`` or ``default`` when unset/blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def env_float(name: str, default: float) -> float:
    """Parse ``name`` as a positive float; fall back to ``default`` otherwise."""
    raw = env_str(name)
    if raw is None:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def env_bool(name: str, default: bool) -> bool:
    """Parse common truthy/falsy spellings; unknown values yield ``default``."""
    raw = env_str(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return default


__all__ = [
    "BASE_URL_ENV",
    "HTTP_TIMEOUT_ENV",
    "LOG_LEVEL_ENV",
    "JSON_LOGS_ENV",
    "env_str",
    "env_float",
    "env_bool",
]
