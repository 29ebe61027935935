"""Services - the two registries, persistence and the embedding host."""

from filing_kernel.services.filing_registry import FilingRegistry
from filing_kernel.services.ledger_host import LedgerHost
from filing_kernel.services.ledger_store import LedgerStore
from filing_kernel.services.season_registry import SeasonRegistry

__all__ = [
    "FilingRegistry",
    "LedgerHost",
    "LedgerStore",
    "SeasonRegistry",
]
