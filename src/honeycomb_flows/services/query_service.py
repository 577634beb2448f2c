"""Query execution — submit a saved query and poll until it completes."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from honeycomb_flows.clients.honeycomb_client import HoneycombClient

logger = logging.getLogger(__name__)

# Honeycomb caps query completion at 10 seconds, so 15 leaves headroom.
MAX_POLL_DURATION_SECONDS = 15.0
POLL_INTERVAL_SECONDS = 0.5


class PollTimeoutError(Exception):
    """Raised when a query result is still incomplete at the deadline."""

    def __init__(self, query_id: str, result_id: str, elapsed_ms: int) -> None:
        self.query_id = query_id
        self.result_id = result_id
        self.elapsed_ms = elapsed_ms
        super().__init__(
            f"Query result polling timed out after {elapsed_ms / 1000:g} seconds. "
            f"Query ID: {query_id}, Result ID: {result_id}"
        )


class QueryService:
    """Bounded, fixed-interval polling around the query_results endpoints.

    Each run_query() call is independent; the only cancellation is the
    deadline. ``clock`` and ``sleep`` are injectable for tests.
    """

    def __init__(
        self,
        client: HoneycombClient,
        *,
        max_duration: float = MAX_POLL_DURATION_SECONDS,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._max_duration = max_duration
        self._poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    async def run_query(
        self, dataset_slug: str, query_id: str,
    ) -> dict[str, Any]:
        """Run a saved query and return the completed query result.

        The submission is not retried; its errors propagate unchanged.

        Raises:
            HoneycombApiError: If submission or a poll is rejected.
            HoneycombTransportError: If submission or a poll gets no response.
            PollTimeoutError: If the result is incomplete at the deadline.
        """
        started = await self._client.create_query_result(dataset_slug, query_id)
        result_id = str(started["id"])
        logger.info("Query %s started as result %s", query_id, result_id)

        start = self._clock()
        while True:
            result = await self._client.get_query_result(dataset_slug, result_id)
            if result.get("complete") is True:
                return result

            # Deadline is checked on both sides of the wait so the last
            # sleep never overshoots it by a full interval.
            remaining = self._max_duration - (self._clock() - start)
            if remaining <= 0:
                raise self._timeout(query_id, result_id, start)
            await self._sleep(min(self._poll_interval, remaining))
            if self._clock() - start >= self._max_duration:
                raise self._timeout(query_id, result_id, start)

    def _timeout(
        self, query_id: str, result_id: str, start: float,
    ) -> PollTimeoutError:
        """Build the timeout error with the elapsed time in milliseconds."""
        elapsed_ms = round((self._clock() - start) * 1000)
        logger.warning(
            "Query %s (result %s) timed out after %d ms",
            query_id, result_id, elapsed_ms,
        )
        return PollTimeoutError(query_id, result_id, elapsed_ms)
