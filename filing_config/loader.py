"""
Configuration Loader (``filing_config.loader``).

Responsibility
--------------
Loads a ledger YAML file and parses it into typed ``filing_config.schema``
dataclass instances.  The single public entry point for runtime config is
``filing_config.get_active_config()``.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields (``config_id``,
  ``version``, ``principals.owner``).
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Wrongly typed values  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from filing_config.schema import (
    DatabaseConfig,
    LedgerConfig,
    LoggingConfig,
    PolicyConfig,
    PrincipalsConfig,
)

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top-level YAML must be a mapping")
    return data


def _int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ValueError(f"{key} must be a non-empty string, got {value!r}")
    return value


def parse_principals(data: dict[str, Any]) -> PrincipalsConfig:
    owner = data["owner"]
    if not isinstance(owner, str) or not owner:
        raise ValueError(f"principals.owner must be a non-empty string, got {owner!r}")
    return PrincipalsConfig(
        owner=owner,
        filing_owner=_optional_str(data, "filing_owner"),
        deadline_authority=_optional_str(data, "deadline_authority"),
        audit_authority=_optional_str(data, "audit_authority"),
    )


def parse_policy(data: dict[str, Any]) -> PolicyConfig:
    defaults = PolicyConfig()
    prefix = data.get("content_hash_prefix", defaults.content_hash_prefix)
    if not isinstance(prefix, str):
        raise ValueError(f"content_hash_prefix must be a string, got {prefix!r}")
    return PolicyConfig(
        min_tax_year=_int(data, "min_tax_year", defaults.min_tax_year),
        max_season_span=_int(data, "max_season_span", defaults.max_season_span),
        max_deductions=_int(data, "max_deductions", defaults.max_deductions),
        content_hash_length=_int(data, "content_hash_length", defaults.content_hash_length),
        content_hash_prefix=prefix,
    )


def parse_database(data: dict[str, Any]) -> DatabaseConfig:
    defaults = DatabaseConfig()
    return DatabaseConfig(
        url=str(data.get("url", defaults.url)),
        echo=bool(data.get("echo", defaults.echo)),
        pool_size=_int(data, "pool_size", defaults.pool_size),
    )


def parse_logging(data: dict[str, Any]) -> LoggingConfig:
    level = str(data.get("level", LoggingConfig().level)).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {sorted(_LOG_LEVELS)}, got {level!r}")
    return LoggingConfig(level=level)


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 over the parsed YAML mapping."""
    canonical = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_ledger_config(data: dict[str, Any]) -> LedgerConfig:
    """
    Parse a complete ``LedgerConfig`` from a YAML mapping.

    Raises:
        KeyError: if ``config_id``, ``version`` or ``principals`` is missing.
        ValueError: on wrongly typed values.
    """
    config_id = str(data["config_id"])
    version = data["version"]
    if isinstance(version, bool) or not isinstance(version, int):
        raise ValueError(f"version must be an integer, got {version!r}")
    start_height = _int(data, "start_height", 0)
    if start_height < 0:
        raise ValueError(f"start_height must be non-negative, got {start_height}")
    return LedgerConfig(
        config_id=config_id,
        version=version,
        principals=parse_principals(data["principals"]),
        start_height=start_height,
        policy=parse_policy(data.get("policy") or {}),
        database=parse_database(data.get("database") or {}),
        logging=parse_logging(data.get("logging") or {}),
        checksum=compute_checksum(data),
    )


def load_ledger_config(path: Path) -> LedgerConfig:
    return parse_ledger_config(load_yaml_file(path))


def log_level(config: LedgerConfig) -> int:
    """Numeric ``logging`` level for the configured level name."""
    return logging.getLevelName(config.logging.level)
