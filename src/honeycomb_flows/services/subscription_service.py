"""Business logic for trigger subscriptions and their delivered messages."""

from __future__ import annotations

import json
from typing import Any

from honeycomb_flows.dao.subscription_dao import SubscriptionDAO
from honeycomb_flows.models.subscription import TriggerDelivery, TriggerSubscription


class SubscriptionService:
    """Built once at startup with its DAO pre-wired.

    Each method wraps its DAO calls in a transaction — one unit of work
    per service call.
    """

    def __init__(self, subscription_dao: SubscriptionDAO) -> None:
        self._dao = subscription_dao

    async def create_subscription(
        self, trigger_id: str | None,
    ) -> dict[str, object]:
        """Register a subscriber. An empty trigger_id subscribes to every trigger."""
        async with self._dao.transaction():
            subscription = await self._dao.create_subscription(
                trigger_id=trigger_id or None,
            )
            await self._dao.commit()
        return self.subscription_to_dict(subscription)

    async def list_subscriptions(self) -> list[TriggerSubscription]:
        """Return every registered subscription."""
        async with self._dao.transaction():
            return await self._dao.list_subscriptions()

    async def delete_subscription(self, subscription_id: str) -> None:
        """Remove a subscription and its inbox.

        Raises:
            ValueError: If the subscription does not exist.
        """
        async with self._dao.transaction():
            subscription = await self._dao.find_subscription(subscription_id)
            if subscription is None:
                raise ValueError("Subscription not found")
            await self._dao.delete_subscription(subscription_id)
            await self._dao.commit()

    async def record_deliveries(
        self, subscription_ids: list[str], body: dict[str, Any],
    ) -> int:
        """Store one delivery per subscription. Returns count stored."""
        if not subscription_ids:
            return 0

        encoded = json.dumps(body)
        async with self._dao.transaction():
            for subscription_id in subscription_ids:
                await self._dao.create_delivery(
                    subscription_id=subscription_id, body=encoded,
                )
            await self._dao.commit()

        return len(subscription_ids)

    async def list_deliveries(
        self, subscription_id: str,
    ) -> list[dict[str, object]]:
        """Return messages delivered to a subscription.

        Raises:
            ValueError: If the subscription does not exist.
        """
        async with self._dao.transaction():
            subscription = await self._dao.find_subscription(subscription_id)
            if subscription is None:
                raise ValueError("Subscription not found")
            deliveries = await self._dao.list_deliveries(subscription_id)
        return [self._delivery_to_dict(d) for d in deliveries]

    @staticmethod
    def subscription_to_dict(
        subscription: TriggerSubscription,
    ) -> dict[str, object]:
        """Serialize a TriggerSubscription to a JSON-safe dict."""
        return {
            "id": subscription.id,
            "trigger_id": subscription.trigger_id,
            "created_at": (
                subscription.created_at.isoformat()
                if subscription.created_at else None
            ),
        }

    @staticmethod
    def _delivery_to_dict(delivery: TriggerDelivery) -> dict[str, object]:
        """Serialize a TriggerDelivery to a JSON-safe dict."""
        return {
            "id": delivery.id,
            "subscription_id": delivery.subscription_id,
            "body": json.loads(delivery.body),
            "created_at": (
                delivery.created_at.isoformat() if delivery.created_at else None
            ),
        }
