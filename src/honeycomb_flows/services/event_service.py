"""Business logic for event batch ingestion."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from honeycomb_flows.clients.honeycomb_client import HoneycombClient


class EventService:
    """Built once at startup with its client pre-wired."""

    def __init__(self, client: HoneycombClient) -> None:
        self._client = client

    async def create_events(
        self, dataset_slug: str, batch: list[Any],
    ) -> list[dict[str, Any]]:
        """Send a batch of events to a dataset.

        Each event is ``{"data": {...}}`` with optional ``time`` (RFC3339 or
        Unix epoch) and ``samplerate``. Events are sent unmodified.

        Returns:
            One ``{"status": ..., "error"?: ...}`` object per event.

        Raises:
            ValueError: If the slug is empty or an event has no ``data`` mapping.
        """
        if not dataset_slug:
            raise ValueError("dataset_slug is required")
        if not batch:
            raise ValueError("batch must contain at least one event")
        for index, event in enumerate(batch):
            if not isinstance(event, Mapping):
                raise ValueError(f"Event at index {index} is not an object")
            if not isinstance(event.get("data"), Mapping):
                raise ValueError(f"Event at index {index} has no 'data' object")
            samplerate = event.get("samplerate")
            if samplerate is not None and (
                isinstance(samplerate, bool) or not isinstance(samplerate, int)
            ):
                raise ValueError(
                    f"Event at index {index} has a non-integer 'samplerate'"
                )

        return await self._client.send_batch(dataset_slug, list(batch))
