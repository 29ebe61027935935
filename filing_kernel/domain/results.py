"""
Operation results (``filing_kernel.domain.results``).

Registry operations report expected failures as data, not exceptions.  An
``OperationResult`` carries either a value or exactly one typed
``FilingKernelError``; callers branch on ``ok`` / ``code`` / ``error_code``
or call ``unwrap()`` to get the value or have the typed error raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from filing_kernel.exceptions import FilingKernelError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of one registry operation."""

    ok: bool
    value: T | None = None
    error: FilingKernelError | None = None

    def __post_init__(self) -> None:
        if self.ok and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.ok and self.error is None:
            raise ValueError("A failed result must carry an error")

    @classmethod
    def success(cls, value: Any = True) -> OperationResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: FilingKernelError) -> OperationResult:
        return cls(ok=False, error=error)

    @property
    def code(self) -> str | None:
        """Symbolic error code, or None on success."""
        return self.error.code if self.error is not None else None

    @property
    def error_code(self) -> int | None:
        """Numeric error code, or None on success."""
        return self.error.error_code if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.ok
