"""Admission checks for trading strategies.

Stages run in a fixed order and every failure is collected, so the caller
receives the full list of findings in one pass:

    1. structural   - ``id``, ``name`` and ``type`` are present
    2. risk         - ``risk_level`` (when given) is a recognized tier
    3. type rules   - per-kind allocation and parameter limits
    4. performance  - declared targets are within their ranges
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from strategy_gate.validation.models import (
    PerformanceTargets,
    StrategyRecord,
    StrategyType,
    ValidationResult,
    Violation,
    ViolationKind,
)
from strategy_gate.validation.risk_validator import RiskValidator, RiskValidatorProtocol

logger = logging.getLogger(__name__)

# Allocation ceilings, percent of portfolio
CONSERVATIVE_MAX_ALLOCATION: float = 15
MOMENTUM_MAX_ALLOCATION: float = 25
TECHNICAL_MAX_ALLOCATION: float = 30
MEAN_REVERSION_MAX_ALLOCATION: float = 20

# Parameter floors
CONSERVATIVE_MIN_STOP_LOSS: float = 0.02
MOMENTUM_MIN_PERIOD_DAYS: float = 7
MEAN_REVERSION_MIN_PERIOD_DAYS: float = 14

# Performance target ranges, inclusive
TARGET_RETURN_RANGE: tuple[float, float] = (0.0, 1.0)
MAX_DRAWDOWN_RANGE: tuple[float, float] = (0.0, 1.0)
RISK_FREE_RATE_RANGE: tuple[float, float] = (0.0, 0.1)


def _above_ceiling(value: float | None, ceiling: float) -> bool:
    # Absent or zero counts as a breach; NaN never satisfies the bound.
    return not value or not value <= ceiling


def _below_floor(value: float | None, floor: float) -> bool:
    return not value or not value >= floor


def _constraint(field: str, message: str) -> Violation:
    return Violation(kind=ViolationKind.CONSTRAINT, field=field, message=message)


def _check_conservative(strategy: StrategyRecord) -> list[Violation]:
    violations = []
    if _above_ceiling(strategy.max_allocation, CONSERVATIVE_MAX_ALLOCATION):
        violations.append(_constraint("maxAllocation", f"Max allocation for conservative strategy must be <= {CONSERVATIVE_MAX_ALLOCATION:g}%"))
    if _below_floor(strategy.stop_loss, CONSERVATIVE_MIN_STOP_LOSS):
        violations.append(_constraint("stopLoss", f"Stop loss for conservative strategy must be >= {CONSERVATIVE_MIN_STOP_LOSS:.0%}"))
    return violations


def _check_momentum(strategy: StrategyRecord) -> list[Violation]:
    violations = []
    if _below_floor(strategy.momentum_period, MOMENTUM_MIN_PERIOD_DAYS):
        violations.append(_constraint("momentumPeriod", f"Momentum period must be >= {MOMENTUM_MIN_PERIOD_DAYS:g} days"))
    if _above_ceiling(strategy.max_allocation, MOMENTUM_MAX_ALLOCATION):
        violations.append(_constraint("maxAllocation", f"Max allocation for momentum strategy must be <= {MOMENTUM_MAX_ALLOCATION:g}%"))
    return violations


def _check_technical(strategy: StrategyRecord) -> list[Violation]:
    violations = []
    indicators = strategy.indicators
    if not isinstance(indicators, list | tuple) or len(indicators) == 0:
        violations.append(_constraint("indicators", "Technical strategy must have at least one indicator"))
    if _above_ceiling(strategy.max_allocation, TECHNICAL_MAX_ALLOCATION):
        violations.append(_constraint("maxAllocation", f"Max allocation for technical strategy must be <= {TECHNICAL_MAX_ALLOCATION:g}%"))
    return violations


def _check_mean_reversion(strategy: StrategyRecord) -> list[Violation]:
    violations = []
    if _below_floor(strategy.mean_period, MEAN_REVERSION_MIN_PERIOD_DAYS):
        violations.append(_constraint("meanPeriod", f"Mean reversion period must be >= {MEAN_REVERSION_MIN_PERIOD_DAYS:g} days"))
    if _above_ceiling(strategy.max_allocation, MEAN_REVERSION_MAX_ALLOCATION):
        violations.append(_constraint("maxAllocation", f"Max allocation for mean reversion strategy must be <= {MEAN_REVERSION_MAX_ALLOCATION:g}%"))
    return violations


def _check_type_rules(strategy: StrategyRecord) -> list[Violation]:
    match strategy.type:
        case StrategyType.CONSERVATIVE:
            return _check_conservative(strategy)
        case StrategyType.MOMENTUM:
            return _check_momentum(strategy)
        case StrategyType.TECHNICAL:
            return _check_technical(strategy)
        case StrategyType.MEAN_REVERSION:
            return _check_mean_reversion(strategy)
        case _:
            return [
                Violation(
                    kind=ViolationKind.UNSUPPORTED_TYPE,
                    field="type",
                    message=f"Unsupported strategy type: {strategy.type}",
                )
            ]


def _check_performance(performance: PerformanceTargets) -> list[Violation]:
    checks = (
        ("targetReturn", performance.target_return, TARGET_RETURN_RANGE, "Target return"),
        ("maxDrawdown", performance.max_drawdown, MAX_DRAWDOWN_RANGE, "Max drawdown"),
        ("riskFreeRate", performance.risk_free_rate, RISK_FREE_RATE_RANGE, "Risk free rate"),
    )
    violations = []
    for field, value, (low, high), label in checks:
        if value is not None and not low <= value <= high:
            violations.append(
                Violation(
                    kind=ViolationKind.PERFORMANCE,
                    field=f"performance.{field}",
                    message=f"{label} must be between {low:g} and {high:g}",
                )
            )
    return violations


def _check_structure(strategy: StrategyRecord) -> list[Violation]:
    violations = []
    for field, label in (("id", "ID"), ("name", "name"), ("type", "type")):
        value = getattr(strategy, field)
        if not value or not value.strip():
            violations.append(Violation(kind=ViolationKind.STRUCTURAL, field=field, message=f"Strategy {label} is required"))
    return violations


# Wire names of the fields read by the per-kind rules.
_TYPE_RULE_FIELDS = frozenset({"maxAllocation", "stopLoss", "momentumPeriod", "indicators", "meanPeriod"})


def _wire_names(model: type[StrategyRecord] | type[PerformanceTargets]) -> dict[str, str]:
    names = {}
    for name, info in model.model_fields.items():
        names[name] = names[info.alias or name] = info.alias or name
    return names


_RECORD_NAMES = _wire_names(StrategyRecord)
_PERFORMANCE_NAMES = _wire_names(PerformanceTargets)


def _field_path(loc: tuple[int | str, ...]) -> tuple[str, ...]:
    """Error location in wire names, e.g. ``("performance", "targetReturn")``."""
    path = [_RECORD_NAMES.get(str(loc[0]), str(loc[0]))]
    if path[0] == "performance" and len(loc) > 1:
        path.append(_PERFORMANCE_NAMES.get(str(loc[1]), str(loc[1])))
    return tuple(path)


def _without(data: Mapping[str, Any], path: tuple[str, ...], names: dict[str, str]) -> dict[str, Any]:
    """Copy of ``data`` with the value at ``path`` removed, under either of its names."""
    head, *rest = path
    trimmed = dict(data)
    if rest and isinstance(trimmed.get(head), Mapping):
        trimmed[head] = _without(trimmed[head], tuple(rest), _PERFORMANCE_NAMES)
        return trimmed
    for key in [k for k in trimmed if names.get(k, k) == head]:
        del trimmed[key]
    return trimmed


def _stage_kind(path: tuple[str, ...]) -> ViolationKind:
    if path[0] == "performance":
        return ViolationKind.PERFORMANCE
    if path[0] in _TYPE_RULE_FIELDS:
        return ViolationKind.CONSTRAINT
    return ViolationKind.STRUCTURAL


def _parse(strategy: StrategyRecord | Mapping[str, Any]) -> tuple[StrategyRecord | None, list[Violation]]:
    """Build a record from ``strategy``, dropping values that cannot be coerced.

    Every dropped value is returned as a violation, tagged with the kind of
    the stage that reads the field.  The record is ``None`` only when the
    input is not a mapping at all.
    """
    if isinstance(strategy, StrategyRecord):
        return strategy, []

    faults: list[Violation] = []
    data: Any = strategy
    while True:
        try:
            return StrategyRecord.model_validate(data), faults
        except ValidationError as exc:
            errors = exc.errors()
            if not isinstance(data, Mapping) or any(not error["loc"] for error in errors):
                faults.append(Violation(kind=ViolationKind.STRUCTURAL, field="strategy", message=f"Invalid strategy record: {errors[0]['msg']}"))
                return None, faults
            before = data
            for error in errors:
                path = _field_path(error["loc"])
                field = ".".join(path)
                faults.append(Violation(kind=_stage_kind(path), field=field, message=f"Invalid value for {field}: {error['msg']}"))
                data = _without(data, path, _RECORD_NAMES)
            if data == before:
                return None, faults


def _merge(faults: list[Violation], findings: list[Violation]) -> list[Violation]:
    # An unparseable field is reported once, not again as missing.
    reported = {v.field for v in faults}
    return faults + [v for v in findings if v.field not in reported]


class StrategyValidator:
    """Decides whether a strategy may be activated."""

    def __init__(self, risk_validator: RiskValidatorProtocol | None = None) -> None:
        self.risk_validator = risk_validator or RiskValidator()

    async def validate(self, strategy: StrategyRecord | Mapping[str, Any]) -> ValidationResult:
        """Validate ``strategy`` and return every finding. Never raises."""
        record, faults = _parse(strategy)
        if record is None:
            logger.info("Strategy rejected: input is not a strategy record")
            return ValidationResult(violations=faults)

        violations = _merge([v for v in faults if v.kind == ViolationKind.STRUCTURAL], _check_structure(record))

        if record.risk_level is not None:
            violations.extend(await self._check_risk(record.risk_level))

        # A missing type is already reported structurally.
        if record.type and record.type.strip():
            type_violations = _check_type_rules(record)
            if any(v.kind == ViolationKind.UNSUPPORTED_TYPE for v in type_violations):
                violations.extend(type_violations)
            else:
                violations.extend(_merge([v for v in faults if v.kind == ViolationKind.CONSTRAINT], type_violations))

        performance_faults = [v for v in faults if v.kind == ViolationKind.PERFORMANCE]
        if record.performance is not None or performance_faults:
            findings = _check_performance(record.performance) if record.performance is not None else []
            violations.extend(_merge(performance_faults, findings))

        result = ValidationResult(violations=violations)
        if result.valid:
            logger.debug("Strategy %r passed validation", record.id)
        else:
            logger.info("Strategy %r rejected: %s", record.id, result.errors)
        return result

    async def _check_risk(self, risk_level: Any) -> list[Violation]:
        try:
            check = await self.risk_validator.assess_risk_level(risk_level)
        except Exception as exc:
            logger.warning("Risk lookup failed for %r: %s", risk_level, exc)
            return [Violation(kind=ViolationKind.RISK, field="riskLevel", message=str(exc) or type(exc).__name__)]
        return [Violation(kind=ViolationKind.RISK, field="riskLevel", message=msg) for msg in check.errors]


async def validate_strategy_async(
    strategy: StrategyRecord | Mapping[str, Any],
    risk_validator: RiskValidatorProtocol | None = None,
) -> ValidationResult:
    return await StrategyValidator(risk_validator).validate(strategy)


def validate_strategy(
    strategy: StrategyRecord | Mapping[str, Any],
    risk_validator: RiskValidatorProtocol | None = None,
) -> ValidationResult:
    """Synchronous entry point. Use :func:`validate_strategy_async` inside a running event loop."""
    return asyncio.run(validate_strategy_async(strategy, risk_validator))
