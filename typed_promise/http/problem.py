"""Failure and payload records produced by the HTTP glue.

``ProblemJson`` models an RFC 7807 problem document
(https://datatracker.ietf.org/doc/html/rfc7807#section-3). It is the
``FailType`` of every promise produced by :mod:`typed_promise.http.process`.

Reserved ``status`` values:

* ``-1``: no usable response was received (or it carried no status);
* ``0``: the transport failed before any response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

NO_RESPONSE_STATUS = -1
NETWORK_ERROR_STATUS = 0


class InvalidParam(BaseModel):
    """Per-parameter validation detail."""

    code: str
    reason: str


class ProblemJson(BaseModel):
    """Normalized failure record.

    Attributes:
        type: URI identifying the problem type; ``None`` means "about:blank".
        title: Short summary of the problem type.
        detail: Explanation specific to this occurrence.
        status: HTTP status code, or one of the reserved values above.
        invalid_params: Per-parameter validation failures (``invalidParams``
            on the wire).

    Unknown members (``traceId`` and the like) are preserved.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    status: int = NO_RESPONSE_STATUS
    invalid_params: Optional[Dict[str, InvalidParam]] = Field(default=None, alias="invalidParams")

    @property
    def network_error(self) -> bool:
        return self.status == NETWORK_ERROR_STATUS


@dataclass(frozen=True)
class BinaryPayload:
    """Raw successful response body plus its declared content type."""

    buffer: bytes
    content_type: str = ""


__all__ = [
    "ProblemJson",
    "InvalidParam",
    "BinaryPayload",
    "NO_RESPONSE_STATUS",
    "NETWORK_ERROR_STATUS",
]
