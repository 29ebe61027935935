"""
Module: filing_kernel.db.base
Responsibility: Declarative base class for all SQLAlchemy ORM models and the
    type annotation map for consistent column types.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the kernel.  ALL model files import from here.  This module MUST NOT
    import from models/, services/ or domain/.

Invariants enforced:
    - Block heights and ids map to BigInteger; a chain height outgrows a
      32-bit column long before any other limit applies.
    - Every model declares its own natural primary key (tax year, filing
      id, registry name).  Ledger keys are assigned by the registries, never
      by the database.
"""

from typing import ClassVar

from sqlalchemy import BigInteger
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Guarantees:
        - int maps to BigInteger.
    """

    type_annotation_map: ClassVar[dict] = {
        int: BigInteger,
    }
