"""Key-value plugin contract — installation-scoped string storage."""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValuePlugin(ABC):
    """Stores string values under fixed keys for one installation.

    Plain get/set/delete with no compare-and-swap. Implementations may
    live in the local database or in the host runtime's own store.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    async def delete(self, keys: list[str]) -> None:
        """Remove every listed key. Missing keys are ignored."""
