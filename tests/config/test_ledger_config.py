"""
Ledger configuration tests.

Verifies:
- The shipped default set loads and its checksum is stable
- Required keys are enforced and wrongly typed values rejected
- Bridges turn a LedgerConfig into a policy, a database and a ready host
"""

import logging
from pathlib import Path

import pytest
import yaml

from filing_config import get_active_config
from filing_config.bridges import (
    apply_logging,
    build_host,
    build_policy,
    init_database,
)
from filing_config.loader import (
    compute_checksum,
    load_ledger_config,
    log_level,
    parse_ledger_config,
)
from filing_config.schema import PolicyConfig
from filing_kernel.db.engine import drop_tables, get_session, reset_engine
from filing_kernel.domain.clock import FixedBlockClock
from filing_kernel.domain.policy import DEFAULT_POLICY
from filing_kernel.logging_config import reset_logging
from tests.conftest import AUDIT, DEADLINE, OWNER, TAXPAYER, VALID_HASH


def _minimal(**overrides) -> dict:
    data = {
        "config_id": "test-ledger",
        "version": 2,
        "principals": {"owner": OWNER},
    }
    data.update(overrides)
    return data


def _write(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "ledger.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


class TestDefaultConfig:
    def test_default_set_loads(self):
        config = get_active_config()

        assert config.config_id == "tax-filing-ledger"
        assert config.version == 1
        assert config.principals.owner == OWNER
        assert config.principals.deadline_authority == DEADLINE
        assert config.principals.audit_authority == AUDIT
        assert config.start_height == 1000
        assert config.database.url == "sqlite:///:memory:"
        assert config.logging.level == "INFO"

    def test_default_policy_matches_kernel_default(self):
        assert build_policy(get_active_config().policy) == DEFAULT_POLICY

    def test_checksum_is_stable(self):
        assert get_active_config().checksum == get_active_config().checksum

    def test_trace_logged(self, captured_logs):
        config = get_active_config()

        trace = [r for r in captured_logs() if r["message"] == "FILING_CONFIG_TRACE"]
        assert trace[0]["config_id"] == config.config_id
        assert trace[0]["checksum"] == config.checksum


class TestParsing:
    def test_minimal_config_uses_defaults(self):
        config = parse_ledger_config(_minimal())

        assert config.start_height == 0
        assert config.policy == PolicyConfig()
        assert config.principals.deadline_authority is None
        assert config.principals.filing_owner is None

    def test_load_from_file(self, tmp_path):
        path = _write(tmp_path, _minimal(policy={"max_deductions": 5}))
        config = load_ledger_config(path)

        assert config.policy.max_deductions == 5
        assert config.policy.min_tax_year == 2020

    @pytest.mark.parametrize("key", ["config_id", "version", "principals"])
    def test_missing_required_key(self, key):
        data = _minimal()
        del data[key]
        with pytest.raises(KeyError):
            parse_ledger_config(data)

    def test_missing_owner(self):
        with pytest.raises(KeyError):
            parse_ledger_config(_minimal(principals={"audit_authority": AUDIT}))

    @pytest.mark.parametrize("overrides", [
        {"version": "two"},
        {"version": True},
        {"start_height": -1},
        {"principals": {"owner": ""}},
        {"principals": {"owner": OWNER, "audit_authority": ""}},
        {"policy": {"max_deductions": "many"}},
        {"policy": {"content_hash_prefix": 7}},
        {"database": {"pool_size": 1.5}},
        {"logging": {"level": "LOUD"}},
    ])
    def test_bad_values_rejected(self, overrides):
        with pytest.raises(ValueError):
            parse_ledger_config(_minimal(**overrides))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_ledger_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_ledger_config(tmp_path / "absent.yaml")

    def test_checksum_ignores_key_order(self):
        a = {"config_id": "x", "version": 1}
        b = {"version": 1, "config_id": "x"}
        assert compute_checksum(a) == compute_checksum(b)
        assert compute_checksum(a) != compute_checksum({"config_id": "x", "version": 2})

    def test_log_level_lowercase_accepted(self):
        config = parse_ledger_config(_minimal(logging={"level": "debug"}))
        assert log_level(config) == logging.DEBUG


class TestBridges:
    def test_build_host_initializes_roles(self):
        host = build_host(get_active_config())

        assert host.height == 1000
        status = host.filings.get_contract_status()
        assert status.owner == OWNER
        assert status.deadline_authority == DEADLINE
        assert status.audit_authority == AUDIT
        assert host.filings.submit_tax_filing(
            host.context(TAXPAYER), 2025, VALID_HASH
        ).value == 0

    def test_build_host_without_roles(self):
        host = build_host(parse_ledger_config(_minimal()))
        assert not host.filings.state.is_initialized
        assert host.height == 0

    def test_build_host_separate_filing_owner(self):
        config = parse_ledger_config(_minimal(principals={
            "owner": OWNER,
            "filing_owner": "ST1FILINGOWNER",
            "deadline_authority": DEADLINE,
            "audit_authority": AUDIT,
        }))
        host = build_host(config, clock=FixedBlockClock(5))

        assert host.height == 5
        assert host.seasons.get_current_status().owner == OWNER
        assert host.filings.get_contract_status().owner == "ST1FILINGOWNER"
        assert host.filings.state.is_initialized

    def test_build_policy(self):
        policy = build_policy(PolicyConfig(max_deductions=3, content_hash_prefix="bafy"))
        assert policy.max_deductions == 3
        assert policy.content_hash_prefix == "bafy"

    def test_invalid_policy_rejected_by_kernel(self):
        with pytest.raises(ValueError):
            build_policy(PolicyConfig(content_hash_length=1))

    def test_init_database_creates_tables(self):
        engine = init_database(get_active_config())
        try:
            host = build_host(get_active_config())
            session = get_session()
            host.persist(session)
            session.commit()
            session.close()
            assert engine.dialect.name == "sqlite"
        finally:
            drop_tables()
            reset_engine()

    def test_apply_logging(self):
        reset_logging()
        try:
            apply_logging(parse_ledger_config(_minimal(logging={"level": "WARNING"})))
            assert logging.getLogger("filing_kernel").level == logging.WARNING
        finally:
            reset_logging()
