"""
Module: filing_kernel.models.registry_settings
Responsibility: ORM persistence for the scalar fields of each registry --
    owner, pause flag, next filing id and the two role principals.
Architecture position: Kernel > Models.  May import from db/base.py only.

One row per registry, keyed by registry name ("season" or "filing").  The
season row leaves the filing-only columns NULL / 0.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from filing_kernel.db.base import Base


class RegistrySettingsModel(Base):
    __tablename__ = "registry_settings"

    registry_name: Mapped[str] = mapped_column("registry", String(20), primary_key=True)

    owner: Mapped[str] = mapped_column(String(128), nullable=False)

    paused: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    next_filing_id: Mapped[int] = mapped_column(nullable=False, default=0)

    deadline_authority: Mapped[str | None] = mapped_column(String(128), nullable=True)

    audit_authority: Mapped[str | None] = mapped_column(String(128), nullable=True)

    def __repr__(self) -> str:
        return f"<RegistrySettingsModel {self.registry_name}: owner={self.owner} paused={self.paused}>"
