"""
filing_kernel.services.ledger_host -- The embedding host for both registries.

Responsibility:
    Owns the two state containers, the block clock and the policy, and
    hands out registries bound to them.  Stamps each call with the clock's
    current height via ``context(caller)``, and saves / restores both
    registries through a ``LedgerStore``.

Architecture position:
    Kernel > Services.  The registries stay independent; the host is the
    only object that holds both.  It does not couple them: checking
    ``seasons.is_open`` before ``filings.submit_tax_filing`` remains the
    deadline authority's decision.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from filing_kernel.domain.clock import BlockClock, ManualBlockClock
from filing_kernel.domain.filing import FilingLedgerState
from filing_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from filing_kernel.domain.season import SeasonLedgerState
from filing_kernel.domain.values import CallContext, Principal
from filing_kernel.logging_config import get_logger
from filing_kernel.services.filing_registry import FilingRegistry
from filing_kernel.services.ledger_store import LedgerStore
from filing_kernel.services.season_registry import SeasonRegistry

logger = get_logger("services.ledger_host")


class LedgerHost:
    """Holds the ledger's state and clock; builds registries over them."""

    def __init__(
        self,
        season_state: SeasonLedgerState,
        filing_state: FilingLedgerState,
        clock: BlockClock | None = None,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._clock = clock or ManualBlockClock()
        self._policy = policy
        self.seasons = SeasonRegistry(season_state, policy)
        self.filings = FilingRegistry(filing_state, policy)

    @classmethod
    def create(
        cls,
        owner: Principal,
        clock: BlockClock | None = None,
        policy: LedgerPolicy = DEFAULT_POLICY,
        filing_owner: Principal | None = None,
    ) -> LedgerHost:
        """Fresh ledger. Both registries share ``owner`` unless
        ``filing_owner`` is given."""
        return cls(
            SeasonLedgerState.new(owner),
            FilingLedgerState.new(filing_owner or owner),
            clock=clock,
            policy=policy,
        )

    @classmethod
    def restore(
        cls,
        session: Session,
        clock: BlockClock | None = None,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> LedgerHost:
        """Rebuild a host from the last persisted snapshot."""
        store = LedgerStore(session)
        return cls(
            store.load_season_state(),
            store.load_filing_state(),
            clock=clock,
            policy=policy,
        )

    @property
    def clock(self) -> BlockClock:
        return self._clock

    @property
    def policy(self) -> LedgerPolicy:
        return self._policy

    @property
    def height(self) -> int:
        return self._clock.height()

    def context(self, caller: Principal) -> CallContext:
        """Call context for ``caller`` at the clock's current height."""
        return CallContext(caller=caller, height=self._clock.height())

    def persist(self, session: Session) -> None:
        """Flush both registries' state into ``session``."""
        store = LedgerStore(session)
        store.save_season_state(self.seasons.state)
        store.save_filing_state(self.filings.state)
        logger.info("ledger_persisted", extra={"height": self.height})
