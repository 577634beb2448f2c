"""Async SQLAlchemy engine behind the key-value and subscription stores."""

from __future__ import annotations

from typing import Any, ClassVar

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """Holds the one engine of the process.

    AppFactory calls init() while wiring the DAOs; the app lifespan
    creates the tables on startup and disposes the engine on shutdown.
    """

    _engine: ClassVar[AsyncEngine | None] = None

    @staticmethod
    def engine_options(database_url: str) -> dict[str, Any]:
        """Engine keyword arguments for a database URL.

        An in-memory SQLite database exists only inside its connection, so
        every session must share a single one.
        """
        url = make_url(database_url)
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            return {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        return {}

    @staticmethod
    def init(database_url: str) -> async_sessionmaker[AsyncSession]:
        """Create the engine and return the session factory the DAOs share."""
        Database._engine = create_async_engine(
            database_url, **Database.engine_options(database_url),
        )
        return async_sessionmaker(Database._engine, expire_on_commit=False)

    @staticmethod
    async def create_tables() -> None:
        """Create the key_values, trigger_subscriptions and trigger_deliveries tables."""
        from honeycomb_flows.models import (  # noqa: F401
            KeyValueEntry,
            TriggerDelivery,
            TriggerSubscription,
        )

        assert Database._engine is not None, "call Database.init() first"
        async with Database._engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)

    @staticmethod
    async def close() -> None:
        """Dispose the engine; a no-op when init() was never called."""
        if Database._engine is not None:
            await Database._engine.dispose()
            Database._engine = None
