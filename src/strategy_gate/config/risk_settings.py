"""Risk tier policy settings.

Environment variables:
    RISK_MIN_LEVEL    – lowest accepted numeric risk level   (default: 0)
    RISK_MAX_LEVEL    – highest accepted numeric risk level  (default: 100)
    RISK_NAMED_TIERS  – comma separated named tiers          (default: low,moderate,medium,high)
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_NAMED_TIERS: tuple[str, ...] = ("low", "moderate", "medium", "high")


class RiskSettings(BaseSettings):
    """Recognized risk tiers, numeric range and named levels."""

    model_config = SettingsConfigDict(
        env_prefix="RISK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    min_level: float = Field(default=0, description="Lowest accepted numeric risk level.")
    max_level: float = Field(default=100, description="Highest accepted numeric risk level.")
    named_tiers: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_NAMED_TIERS,
        description="Named risk tiers, matched case-insensitively.",
    )

    @field_validator("named_tiers", mode="before")
    @classmethod
    def split_named_tiers(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        return tuple(str(tier).strip().lower() for tier in value if str(tier).strip())

    @model_validator(mode="after")
    def validate_range(self) -> RiskSettings:
        if self.min_level > self.max_level:
            raise ValueError(f"min_level ({self.min_level}) must not exceed max_level ({self.max_level})")
        return self
