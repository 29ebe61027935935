"""
filing_kernel.services.ledger_store -- Snapshot persistence for registry state.

Responsibility:
    Writes the in-memory ``SeasonLedgerState`` / ``FilingLedgerState`` to
    the ORM tables and reads them back.  Saves are upserts: existing rows are
    updated in place, new rows are added, and status history rows are only
    ever appended.

Architecture position:
    Kernel > Services.  May import from domain/, models/, db/.

Invariants enforced:
    - Flush-only: the caller owns the transaction.
    - Status history is append-only on disk as in memory: a save never
      rewrites or deletes an existing history row.
    - A load reproduces the secondary (taxpayer, tax_year) index from the
      filing rows rather than persisting it separately.

Failure modes:
    - RegistryStateNotFoundError when loading a registry that was never
      saved.
"""

from __future__ import annotations

from sqlalchemy import select

from filing_kernel.domain.access import RegistryControl
from filing_kernel.domain.filing import (
    Filing,
    FilingLedgerState,
    FilingStatus,
    RolePrincipals,
    StatusChange,
)
from filing_kernel.domain.season import SeasonLedgerState, SeasonStatus, TaxSeason
from filing_kernel.exceptions import RegistryStateNotFoundError
from filing_kernel.logging_config import get_logger
from filing_kernel.models import (
    FilingModel,
    FilingStatusChangeModel,
    RegistrySettingsModel,
    TaxSeasonModel,
)
from filing_kernel.services.base import BaseService

logger = get_logger("services.ledger_store")

SEASON_REGISTRY = "season"
FILING_REGISTRY = "filing"


class LedgerStore(BaseService):
    """Saves and loads registry state through a SQLAlchemy session."""

    # ------------------------------------------------------------------
    # Season registry
    # ------------------------------------------------------------------

    def save_season_state(self, state: SeasonLedgerState) -> None:
        self._save_settings(SEASON_REGISTRY, state.control)

        for tax_year, season in state.seasons.items():
            row = self.session.get(TaxSeasonModel, tax_year)
            if row is None:
                row = TaxSeasonModel(tax_year=tax_year)
                self.session.add(row)
            row.start_block = season.start_block
            row.end_block = season.end_block
            row.status = season.status.value
            row.created_at_height = season.created_at
            row.updated_at_height = season.updated_at

        self.session.flush()
        logger.info(
            "ledger_state_saved",
            extra={"registry": SEASON_REGISTRY, "seasons": len(state.seasons)},
        )

    def load_season_state(self) -> SeasonLedgerState:
        settings = self._load_settings(SEASON_REGISTRY)
        rows = self.session.execute(
            select(TaxSeasonModel).order_by(TaxSeasonModel.tax_year)
        ).scalars()

        state = SeasonLedgerState(
            control=RegistryControl(owner=settings.owner, paused=settings.paused),
        )
        for row in rows:
            state.seasons[row.tax_year] = TaxSeason(
                tax_year=row.tax_year,
                start_block=row.start_block,
                end_block=row.end_block,
                status=SeasonStatus(row.status),
                created_at=row.created_at_height,
                updated_at=row.updated_at_height,
            )

        logger.info(
            "ledger_state_loaded",
            extra={"registry": SEASON_REGISTRY, "seasons": len(state.seasons)},
        )
        return state

    # ------------------------------------------------------------------
    # Filing registry
    # ------------------------------------------------------------------

    def save_filing_state(self, state: FilingLedgerState) -> None:
        settings = self._save_settings(FILING_REGISTRY, state.control)
        settings.next_filing_id = state.next_filing_id
        if state.roles is not None:
            settings.deadline_authority = state.roles.deadline_authority
            settings.audit_authority = state.roles.audit_authority

        appended = 0
        for filing_id, filing in state.filings.items():
            row = self.session.get(FilingModel, filing_id)
            if row is None:
                row = FilingModel(
                    filing_id=filing_id,
                    taxpayer=filing.taxpayer,
                    tax_year=filing.tax_year,
                    content_hash=filing.content_hash,
                    submitted_at=filing.submitted_at,
                    deduction_ids=list(filing.deduction_ids),
                )
                self.session.add(row)
            row.status = filing.status.value
            row.audit_flags = filing.audit_flags

            history = state.status_history.get(filing_id, [])
            for sequence in range(len(row.history), len(history)):
                change = history[sequence]
                row.history.append(
                    FilingStatusChangeModel(
                        sequence=sequence,
                        status=change.status.value,
                        block=change.block,
                        updater=change.updater,
                    )
                )
                appended += 1

        self.session.flush()
        logger.info(
            "ledger_state_saved",
            extra={
                "registry": FILING_REGISTRY,
                "filings": len(state.filings),
                "history_appended": appended,
            },
        )

    def load_filing_state(self) -> FilingLedgerState:
        settings = self._load_settings(FILING_REGISTRY)
        roles = None
        if settings.deadline_authority is not None and settings.audit_authority is not None:
            roles = RolePrincipals(
                deadline_authority=settings.deadline_authority,
                audit_authority=settings.audit_authority,
            )

        state = FilingLedgerState(
            control=RegistryControl(owner=settings.owner, paused=settings.paused),
            next_filing_id=settings.next_filing_id,
            roles=roles,
        )

        rows = self.session.execute(
            select(FilingModel).order_by(FilingModel.filing_id)
        ).scalars()
        for row in rows:
            state.filings[row.filing_id] = Filing(
                filing_id=row.filing_id,
                taxpayer=row.taxpayer,
                tax_year=row.tax_year,
                content_hash=row.content_hash,
                status=FilingStatus(row.status),
                submitted_at=row.submitted_at,
                deduction_ids=tuple(row.deduction_ids),
                audit_flags=row.audit_flags,
            )
            state.filing_index[(row.taxpayer, row.tax_year)] = row.filing_id
            state.status_history[row.filing_id] = [
                StatusChange(FilingStatus(h.status), h.block, h.updater)
                for h in row.history
            ]

        logger.info(
            "ledger_state_loaded",
            extra={"registry": FILING_REGISTRY, "filings": len(state.filings)},
        )
        return state

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _save_settings(
        self, registry: str, control: RegistryControl
    ) -> RegistrySettingsModel:
        settings = self.session.get(RegistrySettingsModel, registry)
        if settings is None:
            settings = RegistrySettingsModel(registry_name=registry, next_filing_id=0)
            self.session.add(settings)
        settings.owner = control.owner
        settings.paused = control.paused
        return settings

    def _load_settings(self, registry: str) -> RegistrySettingsModel:
        settings = self.session.get(RegistrySettingsModel, registry)
        if settings is None:
            raise RegistryStateNotFoundError(registry)
        return settings
