"""
Filing Kernel

A permissioned record-keeping ledger for tax filings with:
- Block-height season windows per tax year
- Role-gated filing lifecycle (submitted, under audit, approved, disputed)
- Per-registry pause switch
- Append-only status history for external auditing
"""

__version__ = "0.1.0"
