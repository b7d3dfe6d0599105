"""HTTP glue: transport wrapper, problem records and promise adapter."""

from .client import HttpClient, aclose_all_clients, get_httpx_client
from .problem import (
    NETWORK_ERROR_STATUS,
    NO_RESPONSE_STATUS,
    BinaryPayload,
    InvalidParam,
    ProblemJson,
)
from .process import (
    ResponseOutcome,
    normalize_binary_response,
    normalize_response,
    process_promise,
    process_promise_as_bytes,
)

__all__ = [
    "HttpClient",
    "aclose_all_clients",
    "get_httpx_client",
    "ProblemJson",
    "InvalidParam",
    "BinaryPayload",
    "NO_RESPONSE_STATUS",
    "NETWORK_ERROR_STATUS",
    "ResponseOutcome",
    "normalize_response",
    "normalize_binary_response",
    "process_promise",
    "process_promise_as_bytes",
]
