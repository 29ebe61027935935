"""Tests for the structured logging system (filing_kernel/logging_config.py)."""

import json
import logging
from io import StringIO

import pytest

from filing_kernel.domain.filing import FilingStatus
from filing_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "filing_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("saved", extra={"filings": 3, "registry": "filing"})

        record = _parse_log(stream)
        assert record["filings"] == 3
        assert record["registry"] == "filing"

    def test_enum_extra_serialized_by_value(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("status", extra={"status": FilingStatus.UNDER_AUDIT})

        assert _parse_log(stream)["status"] == "under-audit"

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        LogContext.set(caller="ST1AUDIT", height=1010, filing_id=0)
        logger.info("test_msg")

        record = _parse_log(stream)
        assert record["caller"] == "ST1AUDIT"
        assert record["height"] == 1010
        assert record["filing_id"] == 0

    def test_exception_fields(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        try:
            raise ValueError("boom")
        except ValueError:
            logger.error("failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_type"] == "ValueError"
        assert record["exc_message"] == "boom"
        assert "traceback" in record

    def test_kernel_exception_code_extracted(self):
        """Kernel exceptions carry a .code attribute and structured fields."""
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        from filing_kernel.exceptions import InvalidTransitionError

        try:
            raise InvalidTransitionError(4, "approved", "disputed")
        except InvalidTransitionError:
            logger.error("transition_error", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_code"] == "INVALID_TRANSITION"
        assert record["exc_type"] == "InvalidTransitionError"
        assert record["exc_filing_id"] == 4
        assert record["exc_from_status"] == "approved"
        assert record["exc_to_status"] == "disputed"

    def test_no_context_fields_when_empty(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("bare_message")

        record = _parse_log(stream)
        assert "caller" not in record
        assert "height" not in record

    def test_valid_json_every_line(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("first")
        logger.warning("second", extra={"k": "v"})
        logger.debug("third")

        logs = _parse_all_logs(stream)
        # default level is INFO, so the debug line is dropped
        assert len(logs) == 2
        for record in logs:
            assert "ts" in record
            assert "level" in record
            assert "logger" in record
            assert "message" in record


# ---------------------------------------------------------------------------
# LogContext tests
# ---------------------------------------------------------------------------


class TestLogContext:
    """Tests for context propagation."""

    def test_set_and_get(self):
        LogContext.set(caller="ST1OWNER", operation="define_season")
        assert LogContext.get_all() == {
            "caller": "ST1OWNER",
            "operation": "define_season",
        }

    def test_clear(self):
        LogContext.set(correlation_id="x")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_bind_context_manager(self):
        LogContext.set(tax_year=2025)
        with LogContext.bind(tax_year=2026):
            assert LogContext.get_all()["tax_year"] == 2026
        assert LogContext.get_all()["tax_year"] == 2025

    def test_bind_restores_none(self):
        """bind() restores to None if there was no previous value."""
        assert "filing_id" not in LogContext.get_all()
        with LogContext.bind(filing_id=7):
            assert LogContext.get_all()["filing_id"] == 7
        assert "filing_id" not in LogContext.get_all()

    def test_bind_keeps_zero(self):
        with LogContext.bind(filing_id=0, height=0):
            assert LogContext.get_all() == {"filing_id": 0, "height": 0}

    def test_all_fields(self):
        LogContext.set(
            correlation_id="c",
            caller="ST1OWNER",
            height=1000,
            operation="submit_tax_filing",
            tax_year=2025,
            filing_id=0,
        )
        ctx = LogContext.get_all()
        assert len(ctx) == 6
        assert ctx["correlation_id"] == "c"
        assert ctx["operation"] == "submit_tax_filing"


# ---------------------------------------------------------------------------
# configure_logging tests
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    """Tests for initialization."""

    def test_idempotent(self):
        h1, _ = _make_handler()
        configure_logging(handler=h1)
        h2, _ = _make_handler()
        configure_logging(handler=h2)  # second call is no-op
        root = logging.getLogger("filing_kernel")
        assert h1 in root.handlers
        assert h2 not in root.handlers
        structured = [h for h in root.handlers if isinstance(h.formatter, StructuredFormatter)]
        assert structured == [h1]

    def test_get_logger_returns_child(self):
        logger = get_logger("services.registry")
        assert logger.name == "filing_kernel.services.registry"

    def test_logger_hierarchy(self):
        """Child loggers inherit the filing_kernel root config."""
        handler, stream = _make_handler()
        configure_logging(handler=handler, level=logging.DEBUG)
        get_logger("deep.nested.module").debug("hierarchy_test")

        record = _parse_log(stream)
        assert record["message"] == "hierarchy_test"
        assert record["logger"] == "filing_kernel.deep.nested.module"
