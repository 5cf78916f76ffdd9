"""Strategy catalogue database settings.

Environment variables:
    DB_CONNECTION_STRING  – SQLAlchemy URL                  (default: sqlite:///./strategy_gate.db)
    DB_POOL_SIZE          – connection pool size            (default: 10, ignored for SQLite)
    DB_MAX_OVERFLOW       – connections allowed over pool   (default: 20, ignored for SQLite)
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Configuration for the strategy catalogue database."""

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    connection_string: str = Field(
        default="sqlite:///./strategy_gate.db",
        description="SQLAlchemy connection string for the strategy catalogue.",
    )
    pool_size: int = Field(default=10, ge=1, description="Connection pool size for server databases.")
    max_overflow: int = Field(default=20, ge=0, description="Connections allowed beyond pool_size.")
