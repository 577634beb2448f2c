"""Subscription controller — thin HTTP adapter for SubscriptionResource."""

from __future__ import annotations

from typing import Any

from litestar import Controller, delete, get, post
from litestar.exceptions import HTTPException

from honeycomb_flows.resources.subscription import (
    SubscriptionNotFoundError,
    SubscriptionResource,
)


class SubscriptionController(Controller):
    """HTTP adapter for Subscribe to Trigger blocks."""

    path = "/api/subscriptions"

    @post("/", status_code=201)
    async def subscribe(
        self,
        data: dict[str, Any],
        subscription_resource: SubscriptionResource,
    ) -> dict[str, object]:
        """Register a subscriber.

        Body: {"trigger_id": "..."}; omit trigger_id to receive every trigger.
        """
        trigger_id = data.get("trigger_id")
        if trigger_id is not None and not isinstance(trigger_id, str):
            raise HTTPException(
                status_code=400, detail="'trigger_id' must be a string",
            )
        return await subscription_resource.subscribe(trigger_id)

    @get("/")
    async def list_subscriptions(
        self, subscription_resource: SubscriptionResource,
    ) -> list[dict[str, object]]:
        """List every subscription."""
        return await subscription_resource.list_subscriptions()

    @delete("/{subscription_id:str}")
    async def unsubscribe(
        self,
        subscription_id: str,
        subscription_resource: SubscriptionResource,
    ) -> None:
        """Remove a subscription and its inbox."""
        try:
            await subscription_resource.unsubscribe(subscription_id)
        except SubscriptionNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error

    @get("/{subscription_id:str}/deliveries")
    async def deliveries(
        self,
        subscription_id: str,
        subscription_resource: SubscriptionResource,
    ) -> list[dict[str, object]]:
        """Return trigger messages delivered to a subscription."""
        try:
            return await subscription_resource.deliveries(subscription_id)
        except SubscriptionNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
