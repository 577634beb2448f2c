"""Database delivery plugin — store trigger messages in trigger_deliveries table."""

from __future__ import annotations

from typing import Any

from honeycomb_flows.plugins.contracts.delivery import DeliveryPlugin
from honeycomb_flows.services.subscription_service import SubscriptionService


class DbDeliveryPlugin(DeliveryPlugin):
    """Append each message to the inbox of every matched subscription."""

    def __init__(self, subscription_service: SubscriptionService) -> None:
        self._service = subscription_service

    async def deliver(
        self, subscription_ids: list[str], body: dict[str, Any],
    ) -> int:
        """Store one delivery row per subscription. Returns count stored."""
        return await self._service.record_deliveries(subscription_ids, body)
