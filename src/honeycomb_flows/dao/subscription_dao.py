"""Data access for TriggerSubscription and TriggerDelivery models."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from honeycomb_flows.models.subscription import TriggerDelivery, TriggerSubscription

_active_conn: ContextVar[AsyncSession] = ContextVar("_subscription_dao_conn")


class SubscriptionDAO:
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

    # --- TriggerSubscription ---

    async def create_subscription(
        self, *, trigger_id: str | None,
    ) -> TriggerSubscription:
        """Insert a new subscription and flush to populate its id."""
        subscription = TriggerSubscription(trigger_id=trigger_id)
        self._conn().add(subscription)
        await self._conn().flush()
        return subscription

    async def find_subscription(
        self, subscription_id: str,
    ) -> TriggerSubscription | None:
        """Find a subscription by primary key."""
        result = await self._conn().execute(
            select(TriggerSubscription).where(
                TriggerSubscription.id == subscription_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_subscriptions(self) -> list[TriggerSubscription]:
        """Return every subscription, oldest first."""
        result = await self._conn().execute(
            select(TriggerSubscription).order_by(TriggerSubscription.created_at)
        )
        return list(result.scalars())

    async def delete_subscription(self, subscription_id: str) -> None:
        """Delete a subscription and its delivered messages."""
        await self._conn().execute(
            delete(TriggerDelivery).where(
                TriggerDelivery.subscription_id == subscription_id,
            )
        )
        await self._conn().execute(
            delete(TriggerSubscription).where(
                TriggerSubscription.id == subscription_id,
            )
        )

    # --- TriggerDelivery ---

    async def create_delivery(
        self, *, subscription_id: str, body: str,
    ) -> TriggerDelivery:
        """Insert a delivered message (JSON text)."""
        delivery = TriggerDelivery(subscription_id=subscription_id, body=body)
        self._conn().add(delivery)
        return delivery

    async def list_deliveries(
        self, subscription_id: str,
    ) -> list[TriggerDelivery]:
        """Return messages delivered to a subscription, oldest first."""
        result = await self._conn().execute(
            select(TriggerDelivery)
            .where(TriggerDelivery.subscription_id == subscription_id)
            .order_by(TriggerDelivery.created_at)
        )
        return list(result.scalars())

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._conn().commit()
