"""
Pytest fixtures for the filing kernel test suite.

Provides:
- Structured logging configured once per session, LogContext cleared per test
- captured_logs for asserting on emitted JSON log lines
- SQLite in-memory database sessions (tables created per test)
- Registry fixtures over fresh state at block height 1000
"""

import json
import logging
from io import StringIO

import pytest

from filing_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from filing_kernel.domain.clock import ManualBlockClock
from filing_kernel.domain.filing import FilingLedgerState
from filing_kernel.domain.season import SeasonLedgerState
from filing_kernel.domain.values import CallContext
from filing_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from filing_kernel.services.filing_registry import FilingRegistry
from filing_kernel.services.ledger_host import LedgerHost
from filing_kernel.services.season_registry import SeasonRegistry

OWNER = "ST1OWNER"
TAXPAYER = "ST1TAXPAYER"
OTHER_TAXPAYER = "ST2TAXPAYER"
DEADLINE = "ST1DEADLINE"
AUDIT = "ST1AUDIT"
HACKER = "ST1HACKER"

START_HEIGHT = 1000

VALID_HASH = "Qm" + "a" * 44


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture filing_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, seasons):
            seasons.define_season(...)
            logs = captured_logs()
            assert any(r["message"] == "operation_applied" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("filing_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def engine():
    engine = init_engine_from_url("sqlite:///:memory:")
    create_tables()
    yield engine
    drop_tables()
    reset_engine()


@pytest.fixture
def session(engine):
    session = get_session()
    yield session
    session.rollback()
    session.close()


# =============================================================================
# Call contexts
# =============================================================================


def ctx(caller: str, height: int = START_HEIGHT) -> CallContext:
    return CallContext(caller=caller, height=height)


@pytest.fixture
def owner_ctx() -> CallContext:
    return ctx(OWNER)


@pytest.fixture
def taxpayer_ctx() -> CallContext:
    return ctx(TAXPAYER)


@pytest.fixture
def audit_ctx() -> CallContext:
    return ctx(AUDIT)


@pytest.fixture
def deadline_ctx() -> CallContext:
    return ctx(DEADLINE)


# =============================================================================
# Registry fixtures
# =============================================================================


@pytest.fixture
def seasons() -> SeasonRegistry:
    return SeasonRegistry(SeasonLedgerState.new(OWNER))


@pytest.fixture
def filings() -> FilingRegistry:
    """Uninitialized filing registry."""
    return FilingRegistry(FilingLedgerState.new(OWNER))


@pytest.fixture
def initialized_filings(filings, owner_ctx) -> FilingRegistry:
    filings.initialize(owner_ctx, DEADLINE, AUDIT).unwrap()
    return filings


@pytest.fixture
def clock() -> ManualBlockClock:
    return ManualBlockClock(START_HEIGHT)


@pytest.fixture
def host(clock) -> LedgerHost:
    return LedgerHost.create(OWNER, clock=clock)
