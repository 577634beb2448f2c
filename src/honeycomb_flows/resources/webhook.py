"""Webhook resource — authenticate, parse and fan out trigger callbacks."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from honeycomb_flows.auth.webhook import WebhookAuthenticator
from honeycomb_flows.services.trigger_service import TriggerService


class MissingBodyError(Exception):
    """Raised when a callback has no usable JSON object body."""


class WebhookResource:
    """Inbound trigger callback handling.

    Built once at startup with all dependencies pre-wired.
    """

    def __init__(
        self,
        *,
        authenticator: WebhookAuthenticator,
        trigger_service: TriggerService,
    ) -> None:
        self._authenticator = authenticator
        self._triggers = trigger_service

    async def authenticate(
        self, query: Mapping[str, str], headers: Mapping[str, str],
    ) -> None:
        """Reject the request unless it presents the current secret.

        Raises:
            WebhookUnauthenticatedError: If the secret is missing or wrong.
        """
        await self._authenticator.require(query, headers)

    @staticmethod
    def parse_payload(raw: bytes) -> dict[str, Any]:
        """Decode the trigger payload.

        Raises:
            MissingBodyError: If the body is empty, not JSON, or not an object.
        """
        if not raw.strip():
            raise MissingBodyError("Missing request body")
        try:
            payload = json.loads(raw)
        except ValueError as error:
            raise MissingBodyError("Request body is not valid JSON") from error
        if not isinstance(payload, dict):
            raise MissingBodyError("Request body must be a JSON object")
        return payload

    async def dispatch(self, payload: dict[str, Any]) -> dict[str, object]:
        """Fan the payload out to matching subscriptions."""
        matched = await self._triggers.fan_out(payload)
        return {"success": True, "matched_blocks": matched}
