"""Delivery plugin contract — hand matched trigger messages to subscribers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DeliveryPlugin(ABC):
    """Delivers a message body to a set of subscriptions.

    Implementations decide what delivery means: persist to an inbox,
    forward to the host runtime's messaging bus, or both.
    """

    @abstractmethod
    async def deliver(
        self, subscription_ids: list[str], body: dict[str, Any],
    ) -> int:
        """Deliver ``body`` to each subscription.

        Args:
            subscription_ids: Subscriptions that matched the message.
            body: JSON-safe message, e.g. ``{"type": "trigger_fired", ...}``.

        Returns:
            Count of deliveries made.
        """
