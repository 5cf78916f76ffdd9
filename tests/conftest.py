"""Shared test fixtures.

Every test gets a fresh in-memory SQLite catalogue and a clean connector cache.
"""

import os

import pytest

# Force an in-memory SQLite URL for the whole test run, before any
# DatabaseConnector is instantiated.
os.environ.setdefault("DB_CONNECTION_STRING", "sqlite:///:memory:")


from strategy_gate.storage import get_database_connector  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_db_singleton(monkeypatch):
    get_database_connector.cache_clear()
    monkeypatch.setenv("DB_CONNECTION_STRING", "sqlite:///:memory:")
    for var in ("RISK_MIN_LEVEL", "RISK_MAX_LEVEL", "RISK_NAMED_TIERS"):
        monkeypatch.delenv(var, raising=False)

    yield

    get_database_connector().dispose()
    get_database_connector.cache_clear()


@pytest.fixture
def conservative() -> dict:
    return {"id": "s1", "name": "Safe", "type": "conservative", "maxAllocation": 10, "stopLoss": 0.03}


@pytest.fixture
def technical() -> dict:
    return {"id": "t1", "name": "Signals", "type": "technical", "indicators": ["RSI", "MACD"], "maxAllocation": 25}
