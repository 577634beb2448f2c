"""Blocks resource — protocol-agnostic event and query operations."""

from __future__ import annotations

from typing import Any

from honeycomb_flows.clients.honeycomb_client import (
    HoneycombApiError,
    HoneycombClient,
    HoneycombTransportError,
)
from honeycomb_flows.resources.installation import UpstreamError
from honeycomb_flows.services.event_service import EventService
from honeycomb_flows.services.query_service import PollTimeoutError, QueryService


class BlockValidationError(Exception):
    """Raised when a block invocation is missing required input."""


class NotConfiguredError(Exception):
    """Raised when a block runs before an API key is configured."""


class QueryTimeoutError(Exception):
    """Raised when a query result did not complete before the deadline."""


class BlocksResource:
    """Create Events and Run Query block operations.

    Built once at startup with all dependencies pre-wired.
    """

    def __init__(
        self,
        *,
        honeycomb_client: HoneycombClient,
        event_service: EventService,
        query_service: QueryService,
    ) -> None:
        self._client = honeycomb_client
        self._events = event_service
        self._queries = query_service

    async def create_events(
        self, dataset_slug: str, batch: object,
    ) -> list[dict[str, Any]]:
        """Send an event batch; returns one status object per event.

        Raises:
            BlockValidationError: If the slug or batch is malformed.
            NotConfiguredError: If no API key is set.
            UpstreamError: If Honeycomb rejects or never answers the request.
        """
        if not isinstance(batch, list):
            raise BlockValidationError("'batch' must be an array of events")
        self._require_configured()
        try:
            return await self._events.create_events(dataset_slug, batch)
        except ValueError as error:
            raise BlockValidationError(str(error)) from error
        except (HoneycombApiError, HoneycombTransportError) as error:
            raise UpstreamError(f"Failed to send events: {error}") from error

    async def run_query(
        self, dataset_slug: str, query_id: str,
    ) -> dict[str, Any]:
        """Run a saved query and return the completed result.

        Raises:
            BlockValidationError: If dataset_slug or query_id is missing.
            UpstreamError: If Honeycomb rejects or never answers a request.
            NotConfiguredError: If no API key is set.
            QueryTimeoutError: If the result is still incomplete at the deadline.
        """
        if not dataset_slug or not query_id:
            raise BlockValidationError("dataset_slug and query_id are required")
        self._require_configured()
        try:
            return await self._queries.run_query(dataset_slug, query_id)
        except PollTimeoutError as error:
            raise QueryTimeoutError(str(error)) from error
        except (HoneycombApiError, HoneycombTransportError) as error:
            raise UpstreamError(f"Failed to run query: {error}") from error

    def _require_configured(self) -> None:
        if not self._client.is_configured:
            raise NotConfiguredError("Honeycomb API key not configured")
