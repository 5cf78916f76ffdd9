"""Repository for admitted strategies.

Every write goes through the strategy validator first: a strategy that fails
validation is never persisted.

The synchronous ``validate_strategy`` / ``save_strategy`` drive the validator
with ``asyncio.run`` and cannot be called from inside a running event loop;
async callers use ``validate_strategy_async`` / ``save_strategy_async``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select

from strategy_gate.exceptions import StrategyNotFoundError, StrategyValidationError
from strategy_gate.validation import (
    RiskValidatorProtocol,
    StrategyRecord,
    ValidationResult,
    validate_strategy,
    validate_strategy_async,
)

from .database_connector import DatabaseConnector
from .models import StoredStrategy

logger = logging.getLogger(__name__)


class StrategyRepository:
    """Manage the catalogue of admitted strategies."""

    def __init__(self, db: DatabaseConnector | None = None, risk_validator: RiskValidatorProtocol | None = None) -> None:
        self.db = db or DatabaseConnector()
        self.risk_validator = risk_validator

    # ------------------------------------------------------------------
    # Validate
    # ------------------------------------------------------------------

    def validate_strategy(self, strategy: StrategyRecord | Mapping[str, Any]) -> ValidationResult:
        return validate_strategy(strategy, self.risk_validator)

    async def validate_strategy_async(self, strategy: StrategyRecord | Mapping[str, Any]) -> ValidationResult:
        return await validate_strategy_async(strategy, self.risk_validator)

    # ------------------------------------------------------------------
    # Create / replace
    # ------------------------------------------------------------------

    def save_strategy(self, strategy: StrategyRecord | Mapping[str, Any]) -> StoredStrategy:
        """Validate and persist ``strategy``, replacing any stored strategy with the same id.

        Raises ``StrategyValidationError`` if the strategy is rejected.
        """
        return self._persist(strategy, self.validate_strategy(strategy))

    async def save_strategy_async(self, strategy: StrategyRecord | Mapping[str, Any]) -> StoredStrategy:
        """Async form of :meth:`save_strategy`; the database write itself is synchronous."""
        return self._persist(strategy, await self.validate_strategy_async(strategy))

    def _persist(self, strategy: StrategyRecord | Mapping[str, Any], result: ValidationResult) -> StoredStrategy:
        if not result.valid:
            raise StrategyValidationError(f"Strategy validation failed: {', '.join(result.errors)}", result)

        record = strategy if isinstance(strategy, StrategyRecord) else StrategyRecord.model_validate(strategy)
        if record.id is None or record.name is None or record.type is None:
            raise StrategyValidationError("Strategy validation failed: id, name and type are required", result)

        session = self.db.get_session()
        try:
            stored: StoredStrategy | None = session.get(StoredStrategy, record.id)
            if stored is None:
                stored = StoredStrategy(strategy_id=record.id)
                session.add(stored)
            stored.name = record.name
            stored.strategy_type = record.type
            stored.payload = record.to_payload()
            session.commit()
            session.refresh(stored)
        except Exception:
            session.rollback()
            raise
        finally:
            self.db.remove_session()
        logger.info("Saved strategy %r (%s)", record.id, record.type)
        return stored

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_strategy(self, strategy_id: str) -> StrategyRecord:
        session = self.db.get_session()
        try:
            stored: StoredStrategy | None = session.get(StoredStrategy, strategy_id)
            if stored is None:
                raise StrategyNotFoundError(f"Strategy {strategy_id} not found")
            return StrategyRecord.model_validate(stored.payload)
        finally:
            self.db.remove_session()

    def list_strategies(self) -> list[StrategyRecord]:
        """Return all stored strategies, oldest first (ties broken by id)."""
        session = self.db.get_session()
        try:
            result = session.execute(select(StoredStrategy).order_by(StoredStrategy.created_at, StoredStrategy.strategy_id))
            return [StrategyRecord.model_validate(row.payload) for row in result.scalars().all()]
        finally:
            self.db.remove_session()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_strategy(self, strategy_id: str) -> None:
        session = self.db.get_session()
        try:
            stored: StoredStrategy | None = session.get(StoredStrategy, strategy_id)
            if stored is None:
                raise StrategyNotFoundError(f"Strategy {strategy_id} not found")
            session.delete(stored)
            session.commit()
        except StrategyNotFoundError:
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            self.db.remove_session()
        logger.info("Deleted strategy %r", strategy_id)
