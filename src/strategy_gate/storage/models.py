"""SQLAlchemy ORM models for the strategy catalogue."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    # Set in Python: SQLite's CURRENT_TIMESTAMP only has one-second resolution.
    return datetime.now(UTC)


class Base(DeclarativeBase):
    pass


class StoredStrategy(Base):
    """An admitted strategy. ``payload`` holds the camelCase record as submitted."""

    __tablename__ = "strategies"

    strategy_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    strategy_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
