"""
Values -- Call context and principal identity.

Every mutating registry operation receives a ``CallContext`` carrying the
authenticated caller and the block height at which the call is evaluated.
Identity verification happens upstream; a principal here is an opaque
string such as ``"ST1OWNER"``.
"""

from __future__ import annotations

from dataclasses import dataclass

Principal = str


@dataclass(frozen=True)
class CallContext:
    """Caller identity and current block height for one operation."""

    caller: Principal
    height: int

    def __post_init__(self) -> None:
        if not isinstance(self.caller, str) or not self.caller:
            raise ValueError("CallContext.caller must be a non-empty principal")
        if isinstance(self.height, bool) or not isinstance(self.height, int):
            raise ValueError(f"CallContext.height must be an integer, got {self.height!r}")
        if self.height < 0:
            raise ValueError(f"CallContext.height must be non-negative, got {self.height}")

    def at(self, height: int) -> CallContext:
        """Same caller, different height."""
        return CallContext(self.caller, height)

    def as_caller(self, caller: Principal) -> CallContext:
        """Same height, different caller."""
        return CallContext(caller, self.height)
