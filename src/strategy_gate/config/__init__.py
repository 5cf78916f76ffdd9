from .database_settings import DatabaseSettings
from .risk_settings import DEFAULT_NAMED_TIERS, RiskSettings

__all__ = [
    "DatabaseSettings",
    "DEFAULT_NAMED_TIERS",
    "RiskSettings",
]
