"""
Configuration Schema (``filing_config.schema``).

Frozen dataclasses describing one ledger deployment.  Produced by
``filing_config.loader`` from YAML; translated into kernel inputs by
``filing_config.bridges``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PrincipalsConfig:
    """Role principals of the deployment.

    ``deadline_authority`` / ``audit_authority`` are optional: when both are
    present the host initializes the filing registry with them on build.
    """

    owner: str
    filing_owner: str | None = None
    deadline_authority: str | None = None
    audit_authority: str | None = None


@dataclass(frozen=True)
class PolicyConfig:
    min_tax_year: int = 2020
    max_season_span: int = 525_600
    max_deductions: int = 20
    content_hash_length: int = 46
    content_hash_prefix: str = "Qm"


@dataclass(frozen=True)
class DatabaseConfig:
    url: str = "sqlite:///:memory:"
    echo: bool = False
    pool_size: int = 5


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class LedgerConfig:
    """Complete configuration of one ledger deployment."""

    config_id: str
    version: int
    principals: PrincipalsConfig
    start_height: int = 0
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    checksum: str | None = None
