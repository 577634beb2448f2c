"""Webhook controller — inbound Honeycomb trigger callbacks."""

from __future__ import annotations

import logging

from litestar import Controller, Request, post
from litestar.datastructures import State
from litestar.response import Response

from honeycomb_flows.auth.webhook import WebhookUnauthenticatedError
from honeycomb_flows.resources.webhook import MissingBodyError, WebhookResource

logger = logging.getLogger(__name__)


class WebhookController(Controller):
    """Single callback endpoint registered as the recipient's webhook URL."""

    path = "/webhook"

    @post("/", status_code=200)
    async def receive(
        self,
        request: Request[object, object, State],
        webhook_resource: WebhookResource,
    ) -> Response[dict[str, object]]:
        """Authenticate, then fan the trigger payload out to subscribers.

        The secret is checked before the body is read.
        """
        logger.info("Received webhook from Honeycomb")
        try:
            await webhook_resource.authenticate(
                request.query_params, request.headers,
            )
        except WebhookUnauthenticatedError as error:
            return Response({"error": str(error)}, status_code=401)

        try:
            payload = webhook_resource.parse_payload(await request.body())
        except MissingBodyError as error:
            return Response({"error": str(error)}, status_code=400)

        try:
            result = await webhook_resource.dispatch(payload)
        except Exception:
            logger.exception("Error processing Honeycomb webhook")
            return Response({"error": "Internal server error"}, status_code=500)
        return Response(result, status_code=200)
