"""
Tests for the small kernel value types: CallContext, LedgerPolicy,
block clocks, OperationResult and the access guards.
"""

import pytest

from filing_kernel.domain.access import (
    RegistryControl,
    require_any_of,
    require_not_paused,
    require_owner,
)
from filing_kernel.domain.clock import FixedBlockClock, ManualBlockClock
from filing_kernel.domain.policy import DEFAULT_POLICY, LedgerPolicy
from filing_kernel.domain.results import OperationResult
from filing_kernel.domain.values import CallContext
from filing_kernel.exceptions import (
    ContractPausedError,
    FilingNotFoundError,
    NotAuthorizedError,
    PausedError,
)


class TestCallContext:
    def test_fields(self):
        ctx = CallContext("ST1OWNER", 1000)
        assert ctx.caller == "ST1OWNER"
        assert ctx.height == 1000

    def test_at_and_as_caller(self):
        ctx = CallContext("ST1OWNER", 1000)
        assert ctx.at(1200) == CallContext("ST1OWNER", 1200)
        assert ctx.as_caller("ST1AUDIT") == CallContext("ST1AUDIT", 1000)

    @pytest.mark.parametrize("caller,height", [
        ("", 1000),
        ("ST1OWNER", -1),
        ("ST1OWNER", 1.5),
        ("ST1OWNER", True),
    ])
    def test_invalid_context_rejected(self, caller, height):
        with pytest.raises(ValueError):
            CallContext(caller, height)


class TestLedgerPolicy:
    def test_defaults(self):
        assert DEFAULT_POLICY.min_tax_year == 2020
        assert DEFAULT_POLICY.max_season_span == 525600
        assert DEFAULT_POLICY.max_deductions == 20
        assert DEFAULT_POLICY.content_hash_length == 46
        assert DEFAULT_POLICY.content_hash_prefix == "Qm"

    def test_tax_year_is_exclusive_minimum(self):
        assert not DEFAULT_POLICY.is_valid_tax_year(2020)
        assert DEFAULT_POLICY.is_valid_tax_year(2021)

    @pytest.mark.parametrize("content_hash,expected", [
        ("Qm" + "a" * 44, True),
        ("Qm" + "a" * 43, False),
        ("Qm" + "a" * 45, False),
        ("Xm" + "a" * 44, False),
        ("InvalidHash", False),
        ("", False),
    ])
    def test_content_hash_contract(self, content_hash, expected):
        assert DEFAULT_POLICY.is_valid_content_hash(content_hash) is expected

    def test_inconsistent_policy_rejected(self):
        with pytest.raises(ValueError):
            LedgerPolicy(content_hash_length=1, content_hash_prefix="Qm")
        with pytest.raises(ValueError):
            LedgerPolicy(max_season_span=0)


class TestBlockClocks:
    def test_fixed_clock(self):
        assert FixedBlockClock(42).height() == 42

    def test_manual_clock_advances(self):
        clock = ManualBlockClock(1000)
        assert clock.advance() == 1001
        assert clock.advance(99) == 1100
        assert clock.height() == 1100

    def test_manual_clock_never_moves_backwards(self):
        clock = ManualBlockClock(1000)
        clock.set_height(1000)
        clock.set_height(2000)
        with pytest.raises(ValueError):
            clock.set_height(1999)
        with pytest.raises(ValueError):
            clock.advance(-1)
        assert clock.height() == 2000

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            ManualBlockClock(-5)


class TestOperationResult:
    def test_success(self):
        result = OperationResult.success(7)
        assert result.ok and bool(result)
        assert result.value == 7
        assert result.code is None
        assert result.error_code is None
        assert result.unwrap() == 7

    def test_failure_carries_typed_error(self):
        result = OperationResult.failure(FilingNotFoundError(9))
        assert not result.ok and not bool(result)
        assert result.code == "FILING_NOT_FOUND"
        assert result.error_code == 103
        with pytest.raises(FilingNotFoundError):
            result.unwrap()

    def test_inconsistent_results_rejected(self):
        with pytest.raises(ValueError):
            OperationResult(ok=True, error=FilingNotFoundError(1))
        with pytest.raises(ValueError):
            OperationResult(ok=False)


class TestAccessGuards:
    def test_not_paused_passes(self):
        require_not_paused(RegistryControl("ST1OWNER"), "op", PausedError)

    def test_paused_raises_registry_specific_error(self):
        control = RegistryControl("ST1OWNER", paused=True)
        with pytest.raises(PausedError):
            require_not_paused(control, "op", PausedError)
        with pytest.raises(ContractPausedError) as exc_info:
            require_not_paused(control, "define_season", ContractPausedError)
        assert exc_info.value.operation == "define_season"

    def test_require_owner(self):
        control = RegistryControl("ST1OWNER")
        require_owner(control, "ST1OWNER")
        with pytest.raises(NotAuthorizedError) as exc_info:
            require_owner(control, "ST1HACKER")
        assert exc_info.value.required_role == "owner"

    def test_require_any_of(self):
        require_any_of("ST1AUDIT", "audit", "ST1AUDIT", "ST1DEADLINE")
        require_any_of("ST1DEADLINE", "audit", "ST1AUDIT", "ST1DEADLINE")
        with pytest.raises(NotAuthorizedError):
            require_any_of("ST1HACKER", "audit", "ST1AUDIT", "ST1DEADLINE")

    def test_unset_principal_never_matches(self):
        with pytest.raises(NotAuthorizedError):
            require_any_of("ST1AUDIT", "audit", None)
