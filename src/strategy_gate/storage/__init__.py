from .database_connector import DatabaseConnector, get_database_connector
from .models import Base, StoredStrategy
from .strategy_repository import StrategyRepository

__all__ = [
    "Base",
    "DatabaseConnector",
    "StoredStrategy",
    "StrategyRepository",
    "get_database_connector",
]
