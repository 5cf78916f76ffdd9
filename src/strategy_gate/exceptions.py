from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strategy_gate.validation.models import ValidationResult


class StrategyGateError(Exception):
    """Base exception for all strategy-gate errors."""

    pass


class InvalidRiskLevelError(StrategyGateError):
    """Raised when a risk level is outside the recognized risk tiers."""

    pass


class RiskLimitError(StrategyGateError):
    """Raised when an allocation or position size breaks a hard risk limit."""

    pass


class StrategyValidationError(StrategyGateError):
    """Raised when a strategy is rejected before being persisted or activated."""

    def __init__(self, message: str, result: ValidationResult | None = None) -> None:
        super().__init__(message)
        self.result = result


class StrategyNotFoundError(StrategyGateError):
    """Raised when a strategy id is not present in the catalogue."""

    pass
