"""
Module: filing_kernel.models.filing
Responsibility: ORM persistence for filings and their status history.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - uq_filing_taxpayer_year -- at most one filing per (taxpayer, tax_year),
      mirroring the registry's secondary index.
    - Status history rows are keyed by (filing_id, sequence); sequence is the
      0-based position in the append-only trail.

Audit relevance:
    filing_status_history is the external audit trail: one row per accepted
    status change with the block height and the principal that made it.
"""

from sqlalchemy import ForeignKey, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from filing_kernel.db.base import Base


class FilingModel(Base):
    """Persisted ``Filing``."""

    __tablename__ = "filings"

    __table_args__ = (
        UniqueConstraint("taxpayer", "tax_year", name="uq_filing_taxpayer_year"),
    )

    filing_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)

    taxpayer: Mapped[str] = mapped_column(String(128), nullable=False)

    tax_year: Mapped[int] = mapped_column(nullable=False)

    # Opaque; never resolved by the kernel
    content_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False)

    submitted_at: Mapped[int] = mapped_column(nullable=False)

    deduction_ids: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)

    audit_flags: Mapped[int] = mapped_column(nullable=False, default=0)

    history: Mapped[list["FilingStatusChangeModel"]] = relationship(
        back_populates="filing",
        order_by="FilingStatusChangeModel.sequence",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<FilingModel {self.filing_id}: {self.taxpayer}/{self.tax_year} {self.status}>"


class FilingStatusChangeModel(Base):
    """One persisted ``StatusChange``."""

    __tablename__ = "filing_status_history"

    filing_id: Mapped[int] = mapped_column(
        ForeignKey("filings.filing_id"),
        primary_key=True,
    )

    sequence: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False)

    block: Mapped[int] = mapped_column(nullable=False)

    updater: Mapped[str] = mapped_column(String(128), nullable=False)

    filing: Mapped[FilingModel] = relationship(back_populates="history")
