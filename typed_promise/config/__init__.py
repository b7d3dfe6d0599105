"""Unified configuration layer.

Sources are merged in a predictable order:

1. Built-in defaults (``typed_promise.config.defaults``)
2. Environment variables (``TYPED_PROMISE_*``)
3. In-code overrides passed to :func:`get_client_settings`

Public API
----------
* get_client_settings(overrides: dict | None = None) -> ClientSettings
* configure_logging(settings: ClientSettings | None = None) -> logging.Logger
"""
from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Dict, Optional

from ..base.logging import configure_logger
from .defaults import (
    DEFAULT_BASE_URL,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_JSON_LOGS,
    DEFAULT_LOG_LEVEL,
)
from .env import (
    BASE_URL_ENV,
    HTTP_TIMEOUT_ENV,
    JSON_LOGS_ENV,
    LOG_LEVEL_ENV,
    env_bool,
    env_float,
    env_str,
)
from .settings import ClientSettings

_FIELD_NAMES = frozenset(f.name for f in fields(ClientSettings))


def get_client_settings(overrides: Optional[Dict[str, Any]] = None) -> ClientSettings:
    """Return settings resolved from defaults, environment and ``overrides``.

    Override keys must be ``ClientSettings`` field names; ``None`` values are
    ignored so callers can pass optional arguments straight through.

    Raises:
        KeyError: an override key is not a known setting.
    """
    settings = ClientSettings(
        base_url=env_str(BASE_URL_ENV, DEFAULT_BASE_URL) or "",
        timeout_seconds=env_float(HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT_SECONDS),
        log_level=(env_str(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
        json_logs=env_bool(JSON_LOGS_ENV, DEFAULT_JSON_LOGS),
    )
    if not overrides:
        return settings
    unknown = set(overrides) - _FIELD_NAMES
    if unknown:
        raise KeyError(f"unknown settings: {', '.join(sorted(unknown))}")
    return replace(settings, **{k: v for k, v in overrides.items() if v is not None})


def configure_logging(settings: Optional[ClientSettings] = None) -> logging.Logger:
    """Apply ``settings.log_level`` / ``settings.json_logs`` to the base logger."""
    settings = settings or get_client_settings()
    return configure_logger(level=settings.log_level, json_mode=settings.json_logs)


__all__ = ["ClientSettings", "get_client_settings", "configure_logging"]
