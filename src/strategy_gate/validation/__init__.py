from .models import (
    PerformanceTargets,
    RiskCheck,
    StrategyRecord,
    StrategyType,
    ValidationResult,
    Violation,
    ViolationKind,
)
from .risk_validator import RiskValidator, RiskValidatorProtocol
from .strategy_validator import StrategyValidator, validate_strategy, validate_strategy_async

__all__ = [
    "PerformanceTargets",
    "RiskCheck",
    "RiskValidator",
    "RiskValidatorProtocol",
    "StrategyRecord",
    "StrategyType",
    "StrategyValidator",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "validate_strategy",
    "validate_strategy_async",
]
