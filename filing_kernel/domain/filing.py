"""
Filing domain types (``filing_kernel.domain.filing``).

Responsibility
--------------
Pure value objects for tax filings: the status lifecycle state machine,
the filing record, its append-only status history, the one-shot role
principals and the registry state container.

Invariants enforced
-------------------
* Lifecycle state machine -- ``FILING_TRANSITIONS`` defines the only valid
  status changes.  There are no self-loops; terminal states have no
  outgoing edges.
* At most one filing per ``(taxpayer, tax_year)``; the index key is a
  tuple.
* Filing ids are assigned sequentially from 0 and never reused.
* Every accepted transition appends exactly one ``StatusChange``; failed
  operations append nothing.
* ``RolePrincipals`` is absent until initialization and immutable after.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from filing_kernel.domain.access import RegistryControl
from filing_kernel.domain.values import Principal
from filing_kernel.exceptions import InvalidTransitionError


# =========================================================================
# Filing Status Lifecycle
# =========================================================================


class FilingStatus(str, Enum):
    SUBMITTED = "submitted"
    UNDER_AUDIT = "under-audit"
    APPROVED = "approved"
    DISPUTED = "disputed"
    REJECTED = "rejected"


FILING_TRANSITIONS: dict[FilingStatus, frozenset[FilingStatus]] = {
    FilingStatus.SUBMITTED: frozenset({FilingStatus.UNDER_AUDIT}),
    FilingStatus.UNDER_AUDIT: frozenset({
        FilingStatus.APPROVED,
        FilingStatus.DISPUTED,
    }),
    # No operation produces REJECTED yet; the edge is kept so a rejected
    # filing can still be disputed once a rejection path exists.
    FilingStatus.REJECTED: frozenset({FilingStatus.DISPUTED}),
    FilingStatus.APPROVED: frozenset(),
    FilingStatus.DISPUTED: frozenset(),
}

TERMINAL_FILING_STATUSES: frozenset[FilingStatus] = frozenset(
    status for status, targets in FILING_TRANSITIONS.items() if not targets
)


def check_transition(
    filing_id: int,
    current: FilingStatus,
    target: FilingStatus,
) -> None:
    """Raise InvalidTransitionError unless ``current -> target`` is an edge."""
    if target not in FILING_TRANSITIONS[current]:
        raise InvalidTransitionError(filing_id, current.value, target.value)


# =========================================================================
# Records
# =========================================================================


@dataclass(frozen=True)
class StatusChange:
    """One entry of a filing's audit trail. Immutable."""

    status: FilingStatus
    block: int
    updater: Principal


@dataclass(frozen=True)
class Filing:
    """A taxpayer's filing for one tax year."""

    filing_id: int
    taxpayer: Principal
    tax_year: int
    content_hash: str
    status: FilingStatus
    submitted_at: int
    deduction_ids: tuple[int, ...] = ()
    audit_flags: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_FILING_STATUSES


@dataclass(frozen=True)
class RolePrincipals:
    """Deadline and audit authorities, configured once by the owner."""

    deadline_authority: Principal
    audit_authority: Principal

    def __post_init__(self) -> None:
        for role in ("deadline_authority", "audit_authority"):
            value = getattr(self, role)
            if not isinstance(value, str) or not value:
                raise ValueError(f"RolePrincipals.{role} must be a non-empty principal")


@dataclass(frozen=True)
class ContractStatus:
    owner: Principal
    paused: bool
    next_id: int
    deadline_authority: Principal | None
    audit_authority: Principal | None


# =========================================================================
# Registry State
# =========================================================================


@dataclass
class FilingLedgerState:
    """
    Mutable state owned by the embedding host.

    ``filing_index`` maps ``(taxpayer, tax_year)`` to a filing id.
    ``status_history`` maps a filing id to its append-only trail.
    """

    control: RegistryControl
    next_filing_id: int = 0
    roles: RolePrincipals | None = None
    filings: dict[int, Filing] = field(default_factory=dict)
    filing_index: dict[tuple[Principal, int], int] = field(default_factory=dict)
    status_history: dict[int, list[StatusChange]] = field(default_factory=dict)

    @classmethod
    def new(cls, owner: Principal) -> FilingLedgerState:
        return cls(control=RegistryControl(owner=owner))

    @property
    def is_initialized(self) -> bool:
        return self.roles is not None
