"""
Found / absent result wrapper returned by client operations.

Asset Bank reports many "not found" cases as a 200 with an incomplete body,
and some client calls have nothing to do (missing id). Those outcomes are
returned as an absent `Lookup` so callers never confuse them with a value
that happens to be empty or with a failed request (which raises).
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Lookup(Generic[T]):
    found: bool
    value: Optional[T] = None
    reason: str = ""

    @classmethod
    def of(cls, value: T) -> "Lookup[T]":
        return cls(found=True, value=value)

    @classmethod
    def absent(cls, reason: str = "") -> "Lookup[T]":
        return cls(found=False, reason=reason)

    @property
    def is_absent(self) -> bool:
        return not self.found

    def unwrap(self) -> T:
        """Return the value, raising LookupError when absent."""
        if not self.found:
            raise LookupError(self.reason or "value is absent")
        return self.value

    def value_or(self, default: T) -> T:
        return self.value if self.found else default
