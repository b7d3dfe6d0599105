"""Built-in defaults for the HTTP glue and logging."""

from __future__ import annotations

DEFAULT_BASE_URL = ""
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_JSON_LOGS = True

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_JSON_LOGS",
    "PROBLEM_JSON_MEDIA_TYPE",
]
