"""Domain layer - pure value objects, state containers and guards."""

from filing_kernel.domain.access import RegistryControl
from filing_kernel.domain.clock import BlockClock, FixedBlockClock, ManualBlockClock
from filing_kernel.domain.filing import (
    FILING_TRANSITIONS,
    TERMINAL_FILING_STATUSES,
    ContractStatus,
    Filing,
    FilingLedgerState,
    FilingStatus,
    RolePrincipals,
    StatusChange,
)
from filing_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from filing_kernel.domain.results import OperationResult
from filing_kernel.domain.season import (
    RegistryStatus,
    SeasonLedgerState,
    SeasonStatus,
    TaxSeason,
)
from filing_kernel.domain.values import CallContext, Principal

__all__ = [
    "BlockClock",
    "CallContext",
    "ContractStatus",
    "DEFAULT_POLICY",
    "FILING_TRANSITIONS",
    "Filing",
    "FilingLedgerState",
    "FilingStatus",
    "FixedBlockClock",
    "LedgerPolicy",
    "ManualBlockClock",
    "OperationResult",
    "Principal",
    "RegistryControl",
    "RegistryStatus",
    "RolePrincipals",
    "SeasonLedgerState",
    "SeasonStatus",
    "StatusChange",
    "TERMINAL_FILING_STATUSES",
    "TaxSeason",
]
