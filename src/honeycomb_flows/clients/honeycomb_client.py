"""Honeycomb API client — constructed once at startup with all config."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_TEAM_HEADER = "X-Honeycomb-Team"


class HoneycombTransportError(Exception):
    """Raised when a request never received a response (DNS, connect, timeout)."""

    def __init__(self, method: str, path: str, cause: BaseException) -> None:
        self.method = method
        self.path = path
        self.cause = cause
        super().__init__(
            f"Honeycomb API request failed: {method} {path}: {cause}"
        )


class HoneycombNotConfiguredError(Exception):
    """Raised when an operation needs the API but no API key is set."""

    def __init__(self) -> None:
        super().__init__("Honeycomb API key not configured")


class HoneycombApiError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(
        self,
        method: str,
        path: str,
        status_code: int,
        status_text: str,
        response_body: str,
    ) -> None:
        self.method = method
        self.path = path
        self.status_code = status_code
        self.status_text = status_text
        self.response_body = response_body
        super().__init__(
            f"Honeycomb API error: {method} {path} returned "
            f"{status_code} {status_text}: {response_body}"
        )


class HoneycombClient:
    """Honeycomb REST client. Built once at startup, reused for every call.

    Does not retry: retry and polling policy belong to the callers.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.honeycomb.io",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """True if an API key is set."""
        return bool(self._api_key)

    async def call(
        self, method: str, path: str, body: Any = None,
    ) -> Any:
        """Issue one authenticated request and return the decoded JSON.

        Returns:
            The parsed JSON value, or None when the response body is empty.

        Raises:
            HoneycombTransportError: If no response was received.
            HoneycombApiError: If the response status is not 2xx.
        """
        url = f"{self._base_url}{path}"
        headers = {_TEAM_HEADER: self._api_key}
        content: bytes | None = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body).encode()

        logger.debug("Honeycomb request: %s %s", method, path)
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport,
        ) as http_client:
            try:
                response = await http_client.request(
                    method, url, headers=headers, content=content,
                )
            except httpx.TransportError as error:
                raise HoneycombTransportError(method, path, error) from error

        if not response.is_success:
            raise HoneycombApiError(
                method,
                path,
                response.status_code,
                response.reason_phrase,
                response.text,
            )

        # DELETE and 202 responses may carry no body
        if not response.text:
            return None
        return response.json()

    async def validate_auth(self) -> dict[str, Any]:
        """Check that the API key is accepted."""
        result: dict[str, Any] = await self.call("GET", "/1/auth")
        return result

    async def send_batch(
        self, dataset_slug: str, batch: list[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        """Send an event batch. Returns one status object per event."""
        result: list[dict[str, Any]] = await self.call(
            "POST", f"/1/batch/{dataset_slug}", batch,
        )
        return result

    async def create_query_result(
        self, dataset_slug: str, query_id: str,
    ) -> dict[str, Any]:
        """Start executing a saved query."""
        result: dict[str, Any] = await self.call(
            "POST", f"/1/query_results/{dataset_slug}", {"query_id": query_id},
        )
        return result

    async def get_query_result(
        self, dataset_slug: str, result_id: str,
    ) -> dict[str, Any]:
        """Fetch the current state of a query result."""
        result: dict[str, Any] = await self.call(
            "GET", f"/1/query_results/{dataset_slug}/{result_id}",
        )
        return result

    async def create_webhook_recipient(
        self, *, name: str, url: str, secret: str,
    ) -> dict[str, Any]:
        """Register a webhook recipient. The response carries its ``id``."""
        result: dict[str, Any] = await self.call(
            "POST",
            "/1/recipients",
            {
                "type": "webhook",
                "details": {
                    "webhook_name": name,
                    "webhook_url": url,
                    "webhook_secret": secret,
                },
            },
        )
        return result

    async def delete_recipient(self, recipient_id: str) -> None:
        """Delete a recipient by id."""
        await self.call("DELETE", f"/1/recipients/{recipient_id}")

    async def list_recipients(self) -> list[dict[str, Any]]:
        """List every recipient in the environment."""
        result = await self.call("GET", "/1/recipients")
        return list(result or [])
