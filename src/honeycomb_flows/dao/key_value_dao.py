"""Data access for the KeyValueEntry model."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from honeycomb_flows.models.key_value import KeyValueEntry

_active_conn: ContextVar[AsyncSession] = ContextVar("_key_value_dao_conn")


class KeyValueDAO:
    """Data access built once at startup with the connection pool.

    Use transaction() to wrap a group of operations in one unit of work.
    """

    def __init__(self, pool: async_sessionmaker[AsyncSession]) -> None:
        self._pool = pool

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Open a unit of work. All DAO calls inside share one connection."""
        async with self._pool() as connection:
            context_token = _active_conn.set(connection)
            try:
                yield
            finally:
                _active_conn.reset(context_token)

    def _conn(self) -> AsyncSession:
        """Return the current unit-of-work connection."""
        return _active_conn.get()

    async def find(self, key: str) -> KeyValueEntry | None:
        """Find an entry by key."""
        result = await self._conn().execute(
            select(KeyValueEntry).where(KeyValueEntry.key == key)
        )
        return result.scalar_one_or_none()

    async def upsert(self, key: str, value: str) -> KeyValueEntry:
        """Insert the entry or overwrite its value."""
        entry = await self.find(key)
        if entry is None:
            entry = KeyValueEntry(key=key, value=value)
            self._conn().add(entry)
        else:
            entry.value = value
        await self._conn().flush()
        return entry

    async def delete_keys(self, keys: list[str]) -> None:
        """Delete all entries whose key is in ``keys``."""
        await self._conn().execute(
            delete(KeyValueEntry).where(KeyValueEntry.key.in_(keys))
        )

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._conn().commit()
