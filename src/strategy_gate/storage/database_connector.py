"""Database connection management with scoped sessions."""

import functools
import logging

from sqlalchemy.engine import Engine, create_engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from strategy_gate.config import DatabaseSettings

from .models import Base

logger = logging.getLogger(__name__)


class DatabaseConnector:
    """
    Owns the engine and thread-local Sessions for the strategy catalogue.

    Instantiate directly for a custom configuration (tests pass an in-memory
    SQLite URL through the environment).  Application code should go through
    ``get_database_connector()``, which keeps one connector per process.
    """

    def __init__(self, settings: DatabaseSettings | None = None) -> None:
        settings = settings or DatabaseSettings()

        # SQLite does not support pool_size / max_overflow arguments.
        engine_kwargs: dict = {"future": True}
        if settings.connection_string.startswith("sqlite"):
            if ":memory:" in settings.connection_string:
                # One shared connection, otherwise every session sees an empty database.
                engine_kwargs["connect_args"] = {"check_same_thread": False}
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_size"] = settings.pool_size
            engine_kwargs["max_overflow"] = settings.max_overflow

        self._engine: Engine = create_engine(settings.connection_string, **engine_kwargs)
        self._session_factory: sessionmaker[Session] = sessionmaker(autocommit=False, autoflush=False, bind=self._engine, expire_on_commit=False)
        self._scoped_session: scoped_session[Session] = scoped_session(self._session_factory)
        logger.info(
            "Database connector initialised: %s",
            settings.connection_string.split("@")[-1] if "@" in settings.connection_string else settings.connection_string,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return the scoped (thread-local) Session."""
        return self._scoped_session()

    def remove_session(self) -> None:
        """Remove the current scoped session, releasing the connection back to the pool."""
        self._scoped_session.remove()

    def create_tables(self) -> None:
        """Create all tables defined in models.py. Idempotent."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created successfully")

    def dispose(self) -> None:
        """Dispose of the engine and all connections."""
        self._scoped_session.remove()
        self._engine.dispose()
        logger.info("Database engine disposed")


@functools.lru_cache(maxsize=1)
def get_database_connector() -> DatabaseConnector:
    """Return the process-wide ``DatabaseConnector``.

    In tests, call ``get_database_connector.cache_clear()`` to get a fresh
    connector, or construct a ``DatabaseConnector`` directly.
    """
    return DatabaseConnector()
