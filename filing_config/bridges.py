"""
Bridges (``filing_config.bridges``).

Translate a ``LedgerConfig`` into kernel inputs.  The kernel never imports
``filing_config``; this module is the only place the two meet.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine

from filing_config.loader import log_level
from filing_config.schema import LedgerConfig, PolicyConfig
from filing_kernel.db.engine import create_tables, init_engine_from_url
from filing_kernel.domain.clock import BlockClock, ManualBlockClock
from filing_kernel.domain.policy import LedgerPolicy
from filing_kernel.logging_config import configure_logging
from filing_kernel.services.ledger_host import LedgerHost


def apply_logging(config: LedgerConfig) -> None:
    """Configure kernel logging at the configured level (idempotent)."""
    configure_logging(level=log_level(config))


def init_database(config: LedgerConfig) -> Engine:
    """Initialize the engine from the database section and create tables."""
    engine = init_engine_from_url(
        config.database.url,
        echo=config.database.echo,
        pool_size=config.database.pool_size,
    )
    create_tables()
    return engine


def build_policy(policy: PolicyConfig) -> LedgerPolicy:
    return LedgerPolicy(
        min_tax_year=policy.min_tax_year,
        max_season_span=policy.max_season_span,
        max_deductions=policy.max_deductions,
        content_hash_length=policy.content_hash_length,
        content_hash_prefix=policy.content_hash_prefix,
    )


def build_host(config: LedgerConfig, clock: BlockClock | None = None) -> LedgerHost:
    """
    Fresh ``LedgerHost`` for a deployment.

    When both role principals are configured, the filing registry is
    initialized with them by the filing owner at the start height.
    """
    principals = config.principals
    host = LedgerHost.create(
        owner=principals.owner,
        clock=clock or ManualBlockClock(config.start_height),
        policy=build_policy(config.policy),
        filing_owner=principals.filing_owner,
    )
    if principals.deadline_authority and principals.audit_authority:
        ctx = host.context(principals.filing_owner or principals.owner)
        host.filings.initialize(
            ctx, principals.deadline_authority, principals.audit_authority
        ).unwrap()
    return host
