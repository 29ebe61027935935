"""ORM models for the persisted ledger state."""

from filing_kernel.models.filing import FilingModel, FilingStatusChangeModel
from filing_kernel.models.registry_settings import RegistrySettingsModel
from filing_kernel.models.season import TaxSeasonModel

__all__ = [
    "FilingModel",
    "FilingStatusChangeModel",
    "RegistrySettingsModel",
    "TaxSeasonModel",
]
