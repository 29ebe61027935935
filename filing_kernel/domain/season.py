"""
Tax season domain types (``filing_kernel.domain.season``).

Responsibility
--------------
Pure value objects for season windows: the season record, its open/closed
status, the registry state container, and the window-validity rule.

Invariants enforced
-------------------
* A season key (tax year) is immutable and never deleted.
* ``start_block < end_block`` and ``end_block - start_block`` is at most
  the policy span (inclusive).
* Windows are future-only at definition and update time:
  ``start_block > height``.  A season cannot be retroactively opened or
  resized after filings could already have been gated against it.
* Window membership (``TaxSeason.contains``) is inclusive on both ends and
  is always derived from the live height, never cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from filing_kernel.domain.access import RegistryControl
from filing_kernel.domain.policy import LedgerPolicy
from filing_kernel.domain.values import Principal
from filing_kernel.exceptions import InvalidDatesError


class SeasonStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class TaxSeason:
    """A year-scoped filing window in block heights."""

    tax_year: int
    start_block: int
    end_block: int
    status: SeasonStatus
    created_at: int
    updated_at: int

    @property
    def is_open(self) -> bool:
        return self.status == SeasonStatus.OPEN

    def contains(self, height: int) -> bool:
        """True if ``height`` falls inside the window, both ends inclusive."""
        return self.start_block <= height <= self.end_block

    @property
    def span(self) -> int:
        return self.end_block - self.start_block


@dataclass(frozen=True)
class RegistryStatus:
    owner: Principal
    paused: bool


@dataclass
class SeasonLedgerState:
    """
    Mutable state owned by the embedding host.

    ``seasons`` maps tax year to the current ``TaxSeason`` record.
    Records are frozen; mutation replaces the dict entry in one assignment.
    """

    control: RegistryControl
    seasons: dict[int, TaxSeason] = field(default_factory=dict)

    @classmethod
    def new(cls, owner: Principal) -> SeasonLedgerState:
        return cls(control=RegistryControl(owner=owner))


def validate_window(
    tax_year: int,
    start_block: int,
    end_block: int,
    height: int,
    policy: LedgerPolicy,
    *,
    check_year: bool = True,
) -> None:
    """
    Apply the season window rule.

    Raises:
        InvalidDatesError: with ``reason`` set to the first failing rule.
            ``check_year=False`` skips the tax-year rule (used on update,
            where the year already exists).
    """
    reason = None
    if check_year and not policy.is_valid_tax_year(tax_year):
        reason = "tax_year"
    elif end_block <= start_block:
        reason = "order"
    elif start_block <= height:
        reason = "not_future"
    elif end_block - start_block > policy.max_season_span:
        reason = "span"

    if reason is not None:
        raise InvalidDatesError(tax_year, start_block, end_block, reason)
