"""
filing_config -- single public entrypoint for ledger configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a parsed, frozen ``LedgerConfig``.
    ``filing_config.bridges`` turns it into a ``LedgerPolicy`` and a
    ready ``LedgerHost``.

Architecture position:
    Configuration -- sits above ``filing_kernel``.  The kernel MUST NEVER
    import from ``filing_config``.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``FILING_CONFIG_TRACE`` log entry with the config id, version and
    checksum, tying ledger activity to the configuration that governed it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from filing_config.loader import load_ledger_config
from filing_config.schema import LedgerConfig

_logger = logging.getLogger("filing_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(path: Path | None = None) -> LedgerConfig:
    """The ONLY public configuration entrypoint.

    Args:
        path: YAML file to load.  Defaults to ``sets/default.yaml``.

    Raises:
        FileNotFoundError, KeyError, ValueError, yaml.YAMLError -- see
        ``filing_config.loader``.
    """
    config = load_ledger_config(path or _DEFAULT_CONFIG_PATH)
    _logger.info(
        "FILING_CONFIG_TRACE",
        extra={
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "owner": config.principals.owner,
        },
    )
    return config


__all__ = ["LedgerConfig", "get_active_config"]
