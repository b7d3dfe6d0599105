"""Resolved client settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientSettings:
    """Container for resolved settings.

    Attributes:
        base_url: Prefix joined to every request path. Empty means absolute
            URLs are expected.
        timeout_seconds: ``httpx`` timeout applied to pooled clients.
        log_level: Level name for the shared package logger.
        json_logs: Emit JSON lines (``True``) or plain text.
    """

    base_url: str
    timeout_seconds: float
    log_level: str
    json_logs: bool


__all__ = ["ClientSettings"]
