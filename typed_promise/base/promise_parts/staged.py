"""Tagged staging slot threaded into the cleanup observer.

A ``Staged`` is one of three shapes:

* ``NO_VALUE``: the path that would fill the slot was never taken;
* ``Staged.of_value(x)``: a (possibly transformed) success value;
* ``Staged.of_error(e)``: a failure, a recovered handler fault, or an
  unrecovered handler fault.

``None`` is a legal payload, so "absent" is carried by the tag rather than by
the payload. Cleanup callbacks receive ``unwrap()``-ed payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class StagedKind(str, Enum):
    NO_VALUE = "no_value"
    VALUE = "value"
    ERROR = "error"


@dataclass(frozen=True)
class Staged:
    """Immutable tagged variant ``{NoValue, Value(T), Error(E)}``."""

    kind: StagedKind
    payload: Any = None

    @classmethod
    def of_value(cls, payload: Any) -> "Staged":
        return cls(StagedKind.VALUE, payload)

    @classmethod
    def of_error(cls, payload: Any) -> "Staged":
        return cls(StagedKind.ERROR, payload)

    @property
    def is_value(self) -> bool:
        return self.kind is StagedKind.VALUE

    @property
    def is_error(self) -> bool:
        return self.kind is StagedKind.ERROR

    @property
    def present(self) -> bool:
        return self.kind is not StagedKind.NO_VALUE

    def unwrap(self) -> Any:
        """Return the payload, or ``None`` for ``NO_VALUE``."""
        return self.payload if self.present else None


NO_VALUE = Staged(StagedKind.NO_VALUE)


__all__ = ["Staged", "StagedKind", "NO_VALUE"]
