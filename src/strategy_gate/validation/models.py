"""Strategy records and validation verdicts.

Units & conventions:
    * **Allocations:** percent of portfolio value (``15`` means 15%).
    * **Stop loss / performance targets:** fractions (``0.02`` means 2%).
    * **Periods:** days.

Records arrive from the strategy-authoring side with camelCase keys
(``maxAllocation``, ``riskLevel``, ...); snake_case names are accepted too.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


class StrategyType(StrEnum):
    """The strategy kinds the validator knows how to constrain."""

    CONSERVATIVE = "conservative"
    MOMENTUM = "momentum"
    TECHNICAL = "technical"
    MEAN_REVERSION = "mean-reversion"


class ViolationKind(StrEnum):
    STRUCTURAL = "structural"
    RISK = "risk"
    UNSUPPORTED_TYPE = "unsupported_type"
    CONSTRAINT = "constraint"
    PERFORMANCE = "performance"


class PerformanceTargets(BaseModel):
    """Declared performance targets, all expressed as fractions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    target_return: float | None = Field(default=None, alias="targetReturn")
    max_drawdown: float | None = Field(default=None, alias="maxDrawdown")
    risk_free_rate: float | None = Field(default=None, alias="riskFreeRate")


class StrategyRecord(BaseModel):
    """A strategy submitted for admission.

    Every field is optional at the model level: a missing ``id`` or an
    unknown ``type`` is a validation finding, not a construction error.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    id: str | None = None
    name: str | None = None
    type: str | None = None
    risk_level: Any = Field(default=None, alias="riskLevel", description="Numeric tier or named level")
    max_allocation: float | None = Field(default=None, alias="maxAllocation", description="Percent of portfolio")

    # Type-specific parameters
    stop_loss: float | None = Field(default=None, alias="stopLoss", description="Fraction, conservative only")
    momentum_period: float | None = Field(default=None, alias="momentumPeriod", description="Days, momentum only")
    indicators: Any = Field(default=None, description="Indicator identifiers, technical only")
    mean_period: float | None = Field(default=None, alias="meanPeriod", description="Days, mean-reversion only")

    performance: PerformanceTargets | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialise back to the camelCase wire shape, dropping unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Violation(BaseModel):
    """A single failed check."""

    model_config = ConfigDict(frozen=True)

    kind: ViolationKind
    field: str
    message: str


class ValidationResult(BaseModel):
    """Result of strategy validation.

    ``errors`` and ``valid`` are derived from ``violations`` so the verdict can
    never disagree with the findings.
    """

    violations: list[Violation] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def errors(self) -> list[str]:
        return [v.message for v in self.violations]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        return len(self.violations) == 0

    def for_field(self, field: str) -> list[Violation]:
        return [v for v in self.violations if v.field == field]

    def of_kind(self, kind: ViolationKind) -> list[Violation]:
        return [v for v in self.violations if v.kind == kind]


class RiskCheck(BaseModel):
    """Structured outcome of an asynchronous risk-level lookup."""

    errors: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        return len(self.errors) == 0
