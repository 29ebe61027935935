"""
filing_kernel.services.season_registry -- Tax season window management.

Responsibility:
    Owns the ``TaxSeason`` records of a ``SeasonLedgerState``: defines
    seasons, flips their open/closed status, resizes their windows and
    answers whether filing is currently permitted for a year.

Architecture position:
    Kernel > Services.  May import from domain/.  Has no dependency on the
    filing registry.

Invariants enforced:
    - Check order: pause, owner, record existence, window rule.
    - Window rule (``validate_window``): ``end > start``, ``start > height``,
      ``end - start <= max_season_span``; definition also requires
      ``tax_year > min_tax_year``.
    - open/close are strict: a no-op transition is rejected.
    - A season is never deleted and its year never changes.

Failure modes (as ``OperationResult`` failures):
    - ContractPausedError, NotAuthorizedError
    - YearExistsError, YearNotFoundError
    - InvalidDatesError
    - SeasonNotOpenError (open_season on an open season)
    - SeasonClosedError (close_season on a closed season)
"""

from __future__ import annotations

from dataclasses import replace

from filing_kernel.domain.access import RegistryControl, require_not_paused, require_owner
from filing_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from filing_kernel.domain.season import (
    RegistryStatus,
    SeasonLedgerState,
    SeasonStatus,
    TaxSeason,
    validate_window,
)
from filing_kernel.domain.values import CallContext
from filing_kernel.exceptions import (
    ContractPausedError,
    SeasonClosedError,
    SeasonNotOpenError,
    YearExistsError,
    YearNotFoundError,
)
from filing_kernel.services.registry_base import RegistryBase, ledger_operation


class SeasonRegistry(RegistryBase):
    """Season window registry over an explicit ``SeasonLedgerState``."""

    registry_name = "season"
    paused_error = ContractPausedError

    def __init__(
        self,
        state: SeasonLedgerState,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._state = state
        self._policy = policy

    @property
    def state(self) -> SeasonLedgerState:
        return self._state

    @property
    def control(self) -> RegistryControl:
        return self._state.control

    @property
    def policy(self) -> LedgerPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @ledger_operation("define_season", bind="tax_year")
    def define_season(
        self,
        ctx: CallContext,
        tax_year: int,
        start_block: int,
        end_block: int,
    ) -> bool:
        """Create an open season for ``tax_year``."""
        self._guard(ctx, "define_season")
        if tax_year in self._state.seasons:
            raise YearExistsError(tax_year)
        validate_window(tax_year, start_block, end_block, ctx.height, self._policy)

        self._state.seasons[tax_year] = TaxSeason(
            tax_year=tax_year,
            start_block=start_block,
            end_block=end_block,
            status=SeasonStatus.OPEN,
            created_at=ctx.height,
            updated_at=ctx.height,
        )
        return True

    @ledger_operation("open_season", bind="tax_year")
    def open_season(self, ctx: CallContext, tax_year: int) -> bool:
        self._guard(ctx, "open_season")
        season = self._require_season(tax_year)
        if season.status == SeasonStatus.OPEN:
            raise SeasonNotOpenError(tax_year)

        self._state.seasons[tax_year] = replace(
            season, status=SeasonStatus.OPEN, updated_at=ctx.height
        )
        return True

    @ledger_operation("close_season", bind="tax_year")
    def close_season(self, ctx: CallContext, tax_year: int) -> bool:
        self._guard(ctx, "close_season")
        season = self._require_season(tax_year)
        if season.status != SeasonStatus.OPEN:
            raise SeasonClosedError(tax_year)

        self._state.seasons[tax_year] = replace(
            season, status=SeasonStatus.CLOSED, updated_at=ctx.height
        )
        return True

    @ledger_operation("update_season_dates", bind="tax_year")
    def update_season_dates(
        self,
        ctx: CallContext,
        tax_year: int,
        new_start: int,
        new_end: int,
    ) -> bool:
        """Resize the window of an existing season. Status is unchanged."""
        self._guard(ctx, "update_season_dates")
        season = self._require_season(tax_year)
        validate_window(
            tax_year, new_start, new_end, ctx.height, self._policy,
            check_year=False,
        )

        self._state.seasons[tax_year] = replace(
            season,
            start_block=new_start,
            end_block=new_end,
            updated_at=ctx.height,
        )
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_open(self, tax_year: int, height: int) -> bool:
        """Is filing for ``tax_year`` permitted at ``height``?

        True iff a season exists, its status is open, and ``height`` lies
        inside ``[start_block, end_block]``.
        """
        season = self._state.seasons.get(tax_year)
        if season is None or not season.is_open:
            return False
        return season.contains(height)

    def get_season(self, tax_year: int) -> TaxSeason | None:
        return self._state.seasons.get(tax_year)

    def get_current_status(self) -> RegistryStatus:
        return RegistryStatus(owner=self.control.owner, paused=self.control.paused)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _guard(self, ctx: CallContext, operation: str) -> None:
        require_not_paused(self.control, operation, self.paused_error)
        require_owner(self.control, ctx.caller)

    def _require_season(self, tax_year: int) -> TaxSeason:
        season = self._state.seasons.get(tax_year)
        if season is None:
            raise YearNotFoundError(tax_year)
        return season
