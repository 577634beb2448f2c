"""Database key-value plugin — store installation state in key_values table."""

from __future__ import annotations

from honeycomb_flows.dao.key_value_dao import KeyValueDAO
from honeycomb_flows.plugins.contracts.key_value import KeyValuePlugin


class DbKeyValuePlugin(KeyValuePlugin):
    """Store installation state in the key_values table.

    Each call is its own unit of work, so a failure between two calls
    leaves the earlier writes in place.
    """

    def __init__(self, key_value_dao: KeyValueDAO) -> None:
        self._dao = key_value_dao

    async def get(self, key: str) -> str | None:
        """Read one value."""
        async with self._dao.transaction():
            entry = await self._dao.find(key)
        return entry.value if entry is not None else None

    async def set(self, key: str, value: str) -> None:
        """Insert or overwrite one value."""
        async with self._dao.transaction():
            await self._dao.upsert(key, value)
            await self._dao.commit()

    async def delete(self, keys: list[str]) -> None:
        """Delete the listed keys."""
        async with self._dao.transaction():
            await self._dao.delete_keys(keys)
            await self._dao.commit()
