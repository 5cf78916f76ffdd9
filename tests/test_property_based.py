"""Property-based tests using Hypothesis.

Fuzzes strategy records to check the verdict invariants and the inclusive
threshold boundaries of each strategy kind.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from strategy_gate.validation import ViolationKind, validate_strategy
from strategy_gate.validation import strategy_validator as sv

SETTINGS = settings(max_examples=200, deadline=None)

maybe_number = st.one_of(
    st.none(),
    st.integers(min_value=-10, max_value=200),
    st.floats(min_value=-1, max_value=200, allow_nan=False, allow_infinity=False),
    st.text(max_size=4),
)

records = st.fixed_dictionaries(
    {},
    optional={
        "id": st.one_of(st.just(""), st.text(max_size=8)),
        "name": st.text(max_size=8),
        "type": st.sampled_from(["conservative", "momentum", "technical", "mean-reversion", "arbitrage", ""]),
        "riskLevel": st.one_of(st.integers(min_value=-50, max_value=150), st.sampled_from(["low", "moderate", "extreme"])),
        "maxAllocation": maybe_number,
        "stopLoss": maybe_number,
        "momentumPeriod": maybe_number,
        "meanPeriod": maybe_number,
        "indicators": st.one_of(st.none(), st.lists(st.sampled_from(["RSI", "MACD", "EMA"]), max_size=3)),
        "performance": st.fixed_dictionaries(
            {},
            optional={
                "targetReturn": maybe_number,
                "maxDrawdown": maybe_number,
                "riskFreeRate": maybe_number,
            },
        ),
    },
)


# ---------------------------------------------------------------------------
# Verdict invariants
# ---------------------------------------------------------------------------


@SETTINGS
@given(record=records)
def test_valid_iff_no_errors(record: dict):
    result = validate_strategy(record)
    assert result.valid == (len(result.errors) == 0)


@SETTINGS
@given(record=records)
def test_idempotent(record: dict):
    assert validate_strategy(record) == validate_strategy(record)


@SETTINGS
@given(record=records)
def test_unsupported_type_is_reported_once(record: dict):
    record["type"] = "arbitrage"
    result = validate_strategy(record)
    assert len(result.of_kind(ViolationKind.UNSUPPORTED_TYPE)) == 1
    assert result.of_kind(ViolationKind.CONSTRAINT) == []


@SETTINGS
@given(record=records)
def test_missing_id_reported_regardless_of_other_fields(record: dict):
    record.pop("id", None)
    result = validate_strategy(record)
    assert "Strategy ID is required" in result.errors


@SETTINGS
@given(record=records)
def test_stage_order(record: dict):
    order = [ViolationKind.STRUCTURAL, ViolationKind.RISK, ViolationKind.UNSUPPORTED_TYPE, ViolationKind.PERFORMANCE]
    kinds = [v.kind for v in validate_strategy(record).violations]
    stages = [order.index(ViolationKind.UNSUPPORTED_TYPE if k == ViolationKind.CONSTRAINT else k) for k in kinds]
    assert stages == sorted(stages)


# ---------------------------------------------------------------------------
# Threshold boundaries
# ---------------------------------------------------------------------------


@SETTINGS
@given(allocation=st.floats(min_value=0.01, max_value=100, allow_nan=False))
def test_conservative_allocation_ceiling(allocation: float):
    record = {"id": "c", "name": "C", "type": "conservative", "maxAllocation": allocation, "stopLoss": 0.05}
    result = validate_strategy(record)
    assert result.valid == (allocation <= sv.CONSERVATIVE_MAX_ALLOCATION)


@SETTINGS
@given(period=st.integers(min_value=1, max_value=60))
def test_momentum_period_floor(period: int):
    record = {"id": "m", "name": "M", "type": "momentum", "momentumPeriod": period, "maxAllocation": 10}
    result = validate_strategy(record)
    assert result.valid == (period >= sv.MOMENTUM_MIN_PERIOD_DAYS)


@SETTINGS
@given(period=st.integers(min_value=1, max_value=60), allocation=st.integers(min_value=1, max_value=40))
def test_mean_reversion_limits(period: int, allocation: int):
    record = {"id": "r", "name": "R", "type": "mean-reversion", "meanPeriod": period, "maxAllocation": allocation}
    result = validate_strategy(record)
    expected = period >= sv.MEAN_REVERSION_MIN_PERIOD_DAYS and allocation <= sv.MEAN_REVERSION_MAX_ALLOCATION
    assert result.valid == expected


@SETTINGS
@given(rate=st.floats(min_value=-0.5, max_value=0.5, allow_nan=False))
def test_risk_free_rate_range(rate: float):
    record = {"id": "t", "name": "T", "type": "technical", "indicators": ["RSI"], "maxAllocation": 5, "performance": {"riskFreeRate": rate}}
    result = validate_strategy(record)
    assert result.valid == (0 <= rate <= 0.1)
