from .config import DatabaseSettings, RiskSettings
from .exceptions import (
    InvalidRiskLevelError,
    RiskLimitError,
    StrategyGateError,
    StrategyNotFoundError,
    StrategyValidationError,
)
from .validation import (
    RiskValidator,
    StrategyRecord,
    StrategyType,
    StrategyValidator,
    ValidationResult,
    validate_strategy,
    validate_strategy_async,
)

__all__ = [
    "DatabaseSettings",
    "InvalidRiskLevelError",
    "RiskLimitError",
    "RiskSettings",
    "RiskValidator",
    "StrategyGateError",
    "StrategyNotFoundError",
    "StrategyRecord",
    "StrategyType",
    "StrategyValidationError",
    "StrategyValidator",
    "ValidationResult",
    "validate_strategy",
    "validate_strategy_async",
]
