"""
Ledger policy -- the numeric limits that govern seasons and filings.

Pure value object.  The configuration layer translates its YAML policy
section into a ``LedgerPolicy`` via ``filing_config.bridges``; the kernel
never reads configuration files itself.
"""

from __future__ import annotations

from dataclasses import dataclass

# One year of one-minute blocks.
MAX_SEASON_SPAN_BLOCKS = 525_600


@dataclass(frozen=True)
class LedgerPolicy:
    """
    Limits applied by both registries.

    ``min_tax_year`` is exclusive: a tax year must be strictly greater.
    ``max_season_span`` is inclusive: ``end - start`` may equal it.
    """

    min_tax_year: int = 2020
    max_season_span: int = MAX_SEASON_SPAN_BLOCKS
    max_deductions: int = 20
    content_hash_length: int = 46
    content_hash_prefix: str = "Qm"

    def __post_init__(self) -> None:
        if self.max_season_span <= 0:
            raise ValueError("max_season_span must be positive")
        if self.max_deductions < 0:
            raise ValueError("max_deductions must be non-negative")
        if len(self.content_hash_prefix) > self.content_hash_length:
            raise ValueError("content_hash_prefix is longer than content_hash_length")

    def is_valid_tax_year(self, tax_year: int) -> bool:
        return tax_year > self.min_tax_year

    def is_valid_content_hash(self, content_hash: str) -> bool:
        return (
            isinstance(content_hash, str)
            and len(content_hash) == self.content_hash_length
            and content_hash.startswith(self.content_hash_prefix)
        )


DEFAULT_POLICY = LedgerPolicy()
