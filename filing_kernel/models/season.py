"""
Module: filing_kernel.models.season
Responsibility: ORM persistence for tax season windows.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - tax_year is the primary key: one season per year, never renamed.
    - status is stored as its string value ("open" / "closed").

Audit relevance:
    created_at_height / updated_at_height record the block heights of the
    defining and the last mutating operation.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from filing_kernel.db.base import Base


class TaxSeasonModel(Base):
    """Persisted ``TaxSeason``."""

    __tablename__ = "tax_seasons"

    __table_args__ = (
        Index("idx_season_window", "start_block", "end_block"),
    )

    tax_year: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)

    start_block: Mapped[int] = mapped_column(nullable=False)

    end_block: Mapped[int] = mapped_column(nullable=False)

    status: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at_height: Mapped[int] = mapped_column(nullable=False)

    updated_at_height: Mapped[int] = mapped_column(nullable=False)

    def __repr__(self) -> str:
        return f"<TaxSeasonModel {self.tax_year}: {self.status}>"
