"""Subscription resource — protocol-agnostic trigger subscription management."""

from __future__ import annotations

from honeycomb_flows.services.subscription_service import SubscriptionService


class SubscriptionNotFoundError(Exception):
    """Raised when the requested subscription does not exist."""


class SubscriptionResource:
    """Subscribe to Trigger block registration and inbox reads.

    Built once at startup with all dependencies pre-wired.
    """

    def __init__(self, *, subscription_service: SubscriptionService) -> None:
        self._service = subscription_service

    async def subscribe(self, trigger_id: str | None) -> dict[str, object]:
        """Register a subscriber; no trigger_id means every trigger."""
        return await self._service.create_subscription(trigger_id)

    async def list_subscriptions(self) -> list[dict[str, object]]:
        """Return every subscription."""
        subscriptions = await self._service.list_subscriptions()
        return [
            SubscriptionService.subscription_to_dict(s) for s in subscriptions
        ]

    async def unsubscribe(self, subscription_id: str) -> None:
        """Remove a subscription.

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist.
        """
        try:
            await self._service.delete_subscription(subscription_id)
        except ValueError as error:
            raise SubscriptionNotFoundError(str(error)) from error

    async def deliveries(self, subscription_id: str) -> list[dict[str, object]]:
        """Return trigger messages delivered to a subscription.

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist.
        """
        try:
            return await self._service.list_deliveries(subscription_id)
        except ValueError as error:
            raise SubscriptionNotFoundError(str(error)) from error
