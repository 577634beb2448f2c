"""Trigger fan-out — match inbound trigger payloads against subscriptions."""

from __future__ import annotations

import logging
from typing import Any

from honeycomb_flows.models.subscription import TriggerSubscription
from honeycomb_flows.plugins.contracts.delivery import DeliveryPlugin
from honeycomb_flows.services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)

TRIGGER_FIRED = "trigger_fired"


class TriggerService:
    """Routes each validated trigger payload to every matching subscriber."""

    def __init__(
        self,
        subscription_service: SubscriptionService,
        delivery_plugin: DeliveryPlugin,
    ) -> None:
        self._subscriptions = subscription_service
        self._delivery = delivery_plugin

    @staticmethod
    def matches(
        subscription: TriggerSubscription, payload: dict[str, Any],
    ) -> bool:
        """True if the subscription has no filter or its filter equals payload["id"]."""
        if not subscription.trigger_id:
            return True
        trigger_id = payload.get("id")
        return bool(trigger_id) and subscription.trigger_id == trigger_id

    async def fan_out(self, payload: dict[str, Any]) -> int:
        """Deliver a trigger_fired message to every match. Returns match count."""
        subscriptions = await self._subscriptions.list_subscriptions()
        matched = [s.id for s in subscriptions if self.matches(s, payload)]
        if matched:
            await self._delivery.deliver(
                matched, {"type": TRIGGER_FIRED, "data": payload},
            )
        logger.info(
            "Trigger %s matched %d of %d subscriptions",
            payload.get("id"), len(matched), len(subscriptions),
        )
        return len(matched)
