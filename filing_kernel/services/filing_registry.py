"""
filing_kernel.services.filing_registry -- Filing lifecycle management.

Responsibility:
    Owns the ``Filing`` records of a ``FilingLedgerState``: one-shot role
    configuration, submission, audit flagging, approval and dispute, and the
    per-filing status history.

Architecture position:
    Kernel > Services.  May import from domain/.  Does NOT call the season
    registry: checking that a season is open for the filing's year is a
    precondition owned by the caller (the deadline authority), consulted
    out of band before ``submit_tax_filing``.

Invariants enforced:
    - Check order: pause, role, domain preconditions, mutation.
      ``dispute_filing`` resolves the filing before the taxpayer check,
      because the required principal is the filing's own taxpayer.
    - Lifecycle transitions follow ``FILING_TRANSITIONS``.
    - One filing per (taxpayer, tax_year); ids are sequential from 0.
    - Each accepted transition appends exactly one ``StatusChange``.
    - Role principals are set once and never changed.

Failure modes (as ``OperationResult`` failures):
    - PausedError, NotAuthorizedError
    - AlreadyInitializedError, NotInitializedError
    - InvalidTaxYearError, InvalidContentHashError, TooManyDeductionsError
    - FilingExistsError, FilingNotFoundError, InvalidTransitionError
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from filing_kernel.domain.access import (
    RegistryControl,
    require_any_of,
    require_not_paused,
    require_owner,
)
from filing_kernel.domain.filing import (
    ContractStatus,
    Filing,
    FilingLedgerState,
    FilingStatus,
    RolePrincipals,
    StatusChange,
    check_transition,
)
from filing_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from filing_kernel.domain.values import CallContext, Principal
from filing_kernel.exceptions import (
    AlreadyInitializedError,
    FilingExistsError,
    FilingNotFoundError,
    InvalidContentHashError,
    InvalidTaxYearError,
    NotAuthorizedError,
    NotInitializedError,
    PausedError,
    TooManyDeductionsError,
)
from filing_kernel.services.registry_base import RegistryBase, ledger_operation


class FilingRegistry(RegistryBase):
    """Filing lifecycle registry over an explicit ``FilingLedgerState``."""

    registry_name = "filing"
    paused_error = PausedError

    def __init__(
        self,
        state: FilingLedgerState,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._state = state
        self._policy = policy

    @property
    def state(self) -> FilingLedgerState:
        return self._state

    @property
    def control(self) -> RegistryControl:
        return self._state.control

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @ledger_operation("initialize")
    def initialize(
        self,
        ctx: CallContext,
        deadline_authority: Principal,
        audit_authority: Principal,
    ) -> bool:
        """Wire in the two role principals. One-shot.

        Raises ValueError for an empty principal; state is left unchanged.
        """
        require_not_paused(self.control, "initialize", self.paused_error)
        require_owner(self.control, ctx.caller)
        roles = self._state.roles
        if roles is not None:
            raise AlreadyInitializedError(
                roles.deadline_authority, roles.audit_authority
            )

        self._state.roles = RolePrincipals(
            deadline_authority=deadline_authority,
            audit_authority=audit_authority,
        )
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @ledger_operation("submit_tax_filing", bind="tax_year")
    def submit_tax_filing(
        self,
        ctx: CallContext,
        tax_year: int,
        content_hash: str,
        deduction_ids: Sequence[int] = (),
    ) -> int:
        """Record the caller's filing for ``tax_year``; returns its id.

        Callers must confirm the season for ``tax_year`` is open before
        calling; this registry does not consult season state.
        """
        require_not_paused(self.control, "submit_tax_filing", self.paused_error)
        if not self._state.is_initialized:
            raise NotInitializedError()
        policy = self._policy
        if not policy.is_valid_tax_year(tax_year):
            raise InvalidTaxYearError(tax_year, policy.min_tax_year)
        if not policy.is_valid_content_hash(content_hash):
            raise InvalidContentHashError(
                content_hash,
                policy.content_hash_length,
                policy.content_hash_prefix,
            )
        deductions = tuple(deduction_ids)
        if len(deductions) > policy.max_deductions:
            raise TooManyDeductionsError(len(deductions), policy.max_deductions)
        key = (ctx.caller, tax_year)
        existing = self._state.filing_index.get(key)
        if existing is not None:
            raise FilingExistsError(ctx.caller, tax_year, existing)

        filing_id = self._state.next_filing_id
        self._state.filings[filing_id] = Filing(
            filing_id=filing_id,
            taxpayer=ctx.caller,
            tax_year=tax_year,
            content_hash=content_hash,
            status=FilingStatus.SUBMITTED,
            submitted_at=ctx.height,
            deduction_ids=deductions,
            audit_flags=0,
        )
        self._state.filing_index[key] = filing_id
        self._state.status_history[filing_id] = [
            StatusChange(FilingStatus.SUBMITTED, ctx.height, ctx.caller)
        ]
        self._state.next_filing_id = filing_id + 1
        return filing_id

    @ledger_operation("flag_for_audit", bind="filing_id")
    def flag_for_audit(self, ctx: CallContext, filing_id: int) -> bool:
        """Audit authority moves a submitted filing under audit."""
        require_not_paused(self.control, "flag_for_audit", self.paused_error)
        require_any_of(ctx.caller, "audit-authority", self._audit_authority)
        filing = self._require_filing(filing_id)
        check_transition(filing_id, filing.status, FilingStatus.UNDER_AUDIT)

        self._apply(
            ctx,
            replace(
                filing,
                status=FilingStatus.UNDER_AUDIT,
                audit_flags=filing.audit_flags + 1,
            ),
        )
        return True

    @ledger_operation("approve_filing", bind="filing_id")
    def approve_filing(self, ctx: CallContext, filing_id: int) -> bool:
        """Audit or deadline authority approves a filing under audit."""
        require_not_paused(self.control, "approve_filing", self.paused_error)
        require_any_of(
            ctx.caller,
            "audit-authority or deadline-authority",
            self._audit_authority,
            self._deadline_authority,
        )
        filing = self._require_filing(filing_id)
        check_transition(filing_id, filing.status, FilingStatus.APPROVED)

        self._apply(ctx, replace(filing, status=FilingStatus.APPROVED))
        return True

    @ledger_operation("dispute_filing", bind="filing_id")
    def dispute_filing(self, ctx: CallContext, filing_id: int) -> bool:
        """The filing's own taxpayer disputes an audit or a rejection."""
        require_not_paused(self.control, "dispute_filing", self.paused_error)
        filing = self._require_filing(filing_id)
        if ctx.caller != filing.taxpayer:
            raise NotAuthorizedError(ctx.caller, "taxpayer")
        check_transition(filing_id, filing.status, FilingStatus.DISPUTED)

        self._apply(ctx, replace(filing, status=FilingStatus.DISPUTED))
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_filing(self, filing_id: int) -> Filing | None:
        return self._state.filings.get(filing_id)

    def get_filing_by_taxpayer_year(
        self, taxpayer: Principal, tax_year: int
    ) -> int | None:
        return self._state.filing_index.get((taxpayer, tax_year))

    def get_status_history(self, filing_id: int) -> tuple[StatusChange, ...]:
        """Audit trail of ``filing_id``, oldest first. Empty if unknown."""
        return tuple(self._state.status_history.get(filing_id, ()))

    def get_contract_status(self) -> ContractStatus:
        roles = self._state.roles
        return ContractStatus(
            owner=self.control.owner,
            paused=self.control.paused,
            next_id=self._state.next_filing_id,
            deadline_authority=roles.deadline_authority if roles else None,
            audit_authority=roles.audit_authority if roles else None,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @property
    def _audit_authority(self) -> Principal | None:
        roles = self._state.roles
        return roles.audit_authority if roles else None

    @property
    def _deadline_authority(self) -> Principal | None:
        roles = self._state.roles
        return roles.deadline_authority if roles else None

    def _require_filing(self, filing_id: int) -> Filing:
        filing = self._state.filings.get(filing_id)
        if filing is None:
            raise FilingNotFoundError(filing_id)
        return filing

    def _apply(self, ctx: CallContext, updated: Filing) -> None:
        self._state.filings[updated.filing_id] = updated
        self._state.status_history.setdefault(updated.filing_id, []).append(
            StatusChange(updated.status, ctx.height, ctx.caller)
        )
