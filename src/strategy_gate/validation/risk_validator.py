"""Risk tier checks.

A risk level is recognized when it is a number inside the configured range
or one of the configured named tiers (``low``, ``moderate``, ...).
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Protocol

from strategy_gate.config import RiskSettings
from strategy_gate.exceptions import InvalidRiskLevelError, RiskLimitError
from strategy_gate.validation.models import RiskCheck

logger = logging.getLogger(__name__)

MAX_ALLOCATION_CEILING: float = 100.0


class RiskValidatorProtocol(Protocol):
    """Capability consumed by the strategy validator."""

    async def assess_risk_level(self, risk_level: Any) -> RiskCheck: ...


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class RiskValidator:
    """Validates risk levels against the recognized tiers."""

    def __init__(self, settings: RiskSettings | None = None) -> None:
        self.settings = settings or RiskSettings()

    def validate_risk_level(self, risk_level: Any) -> None:
        """Raise ``InvalidRiskLevelError`` unless ``risk_level`` is a recognized tier."""
        if risk_level is None or risk_level == "":
            raise InvalidRiskLevelError("Risk level is required")

        tiers = self.settings.named_tiers
        if isinstance(risk_level, str):
            if risk_level.strip().lower() not in tiers:
                raise InvalidRiskLevelError(f"Unknown risk level '{risk_level}'; expected one of: {', '.join(tiers)}")
            return

        if not _is_number(risk_level):
            raise InvalidRiskLevelError(f"Risk level must be a number or one of: {', '.join(tiers)}")

        low, high = self.settings.min_level, self.settings.max_level
        if not low <= risk_level <= high:
            raise InvalidRiskLevelError(f"Risk level must be between {low:g} and {high:g}")

    async def assess_risk_level(self, risk_level: Any) -> RiskCheck:
        """Structured form of :meth:`validate_risk_level`."""
        try:
            self.validate_risk_level(risk_level)
        except InvalidRiskLevelError as exc:
            logger.debug("Risk level %r rejected: %s", risk_level, exc)
            return RiskCheck(errors=[str(exc)])
        return RiskCheck()

    @staticmethod
    def validate_max_allocation(max_allocation: Any) -> None:
        """Hard portfolio limit: an allocation is a percentage in [0, 100]."""
        if max_allocation is None:
            raise RiskLimitError("Max allocation is required")
        if not _is_number(max_allocation):
            raise RiskLimitError("Max allocation must be a number")
        if max_allocation < 0 or max_allocation > MAX_ALLOCATION_CEILING:
            raise RiskLimitError("Max allocation must be between 0 and 100")

    @staticmethod
    def validate_position_size(position_size: Any) -> None:
        if position_size is None:
            raise RiskLimitError("Position size is required")
        if not _is_number(position_size):
            raise RiskLimitError("Position size must be a number")
        if position_size < 0:
            raise RiskLimitError("Position size must be positive")
