"""Webhook recipient lifecycle — provision on install, tear down on uninstall."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from honeycomb_flows.clients.honeycomb_client import (
    HoneycombApiError,
    HoneycombClient,
    HoneycombNotConfiguredError,
)
from honeycomb_flows.plugins.contracts.key_value import KeyValuePlugin
from honeycomb_flows.utils.crypto import Crypto

logger = logging.getLogger(__name__)

RECIPIENT_ID_KEY = "webhook_recipient_id"
SECRET_KEY = "webhook_secret"
STATUS_KEY = "installation_status"
STATUS_DESCRIPTION_KEY = "installation_status_description"


class InstallationState(str, enum.Enum):
    """Lifecycle states of the installation's webhook recipient."""

    ABSENT = "absent"
    PROVISIONING = "provisioning"
    READY = "ready"
    FAILED = "failed"
    DRAINING = "draining"
    DRAINED = "drained"
    DRAINING_FAILED = "draining_failed"


@dataclass
class InstallationStatus:
    """Current state plus a human-readable description on failure."""

    state: InstallationState
    description: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Serialize to a JSON-safe dict."""
        return {"status": self.state.value, "description": self.description}


class RecipientService:
    """Owns the single webhook recipient of this installation.

    Upstream calls and KV writes are not transactional: a crash between
    creating the recipient and storing its id leaves an orphan upstream.
    find_orphans() reports those; nothing deletes them automatically.
    """

    def __init__(
        self,
        client: HoneycombClient,
        store: KeyValuePlugin,
        *,
        public_url: str,
        name_prefix: str = "honeycomb-flows",
    ) -> None:
        self._client = client
        self._store = store
        self._public_url = public_url
        self._name_prefix = name_prefix

    def webhook_url(self, secret: str) -> str:
        """Callback URL registered upstream, carrying the secret as a query param."""
        return f"{self._public_url}/webhook?secret={secret}"

    async def status(self) -> InstallationStatus:
        """Return the last recorded status (``absent`` if none)."""
        state = await self._store.get(STATUS_KEY)
        if state is None:
            return InstallationStatus(InstallationState.ABSENT)
        description = await self._store.get(STATUS_DESCRIPTION_KEY)
        return InstallationStatus(InstallationState(state), description or None)

    async def sync(self) -> InstallationStatus:
        """Verify credentials and make sure exactly one recipient exists.

        Never raises: every failure, including a failed status write,
        becomes a ``failed`` status whose description is the error message.
        """
        try:
            await self._record(InstallationStatus(InstallationState.PROVISIONING))
            if not self._client.is_configured:
                raise HoneycombNotConfiguredError()
            await self._client.validate_auth()

            existing_id = await self._store.get(RECIPIENT_ID_KEY)
            if existing_id:
                logger.info("Webhook recipient already exists: %s", existing_id)
                return await self._record(
                    InstallationStatus(InstallationState.READY),
                )

            secret = Crypto.generate_webhook_secret()
            await self._store.set(SECRET_KEY, secret)

            recipient = await self._client.create_webhook_recipient(
                name=Crypto.generate_recipient_name(self._name_prefix),
                url=self.webhook_url(secret),
                secret=secret,
            )
            recipient_id = str(recipient["id"])
            logger.info("Webhook recipient created with ID: %s", recipient_id)

            await self._store.set(RECIPIENT_ID_KEY, recipient_id)
            return await self._record(InstallationStatus(InstallationState.READY))
        except Exception as error:
            logger.error("Installation sync failed: %s", error)
            return await self._record_failure(
                InstallationStatus(InstallationState.FAILED, str(error)),
            )

    async def drain(self) -> InstallationStatus:
        """Delete the upstream recipient and forget its id and secret.

        A 404 from upstream counts as already deleted. Any other failure
        leaves stored state untouched so a retry can resume. Never raises.
        """
        try:
            await self._record(InstallationStatus(InstallationState.DRAINING))
            recipient_id = await self._store.get(RECIPIENT_ID_KEY)
            if not recipient_id:
                logger.info("No webhook recipient stored, skipping deletion")
                return await self._record(
                    InstallationStatus(InstallationState.DRAINED),
                )

            try:
                await self._client.delete_recipient(recipient_id)
                logger.info("Deleted webhook recipient: %s", recipient_id)
            except HoneycombApiError as error:
                if error.status_code != 404:
                    raise
                logger.info(
                    "Webhook recipient %s not found (404), treating as deleted",
                    recipient_id,
                )

            await self._store.delete([RECIPIENT_ID_KEY, SECRET_KEY])
            return await self._record(InstallationStatus(InstallationState.DRAINED))
        except Exception as error:
            logger.error("Installation drain failed: %s", error)
            return await self._record_failure(
                InstallationStatus(InstallationState.DRAINING_FAILED, str(error)),
            )

    async def find_orphans(self) -> list[dict[str, Any]]:
        """List upstream webhook recipients created by this installation but not stored.

        Raises:
            HoneycombApiError: If the recipient listing is rejected.
            HoneycombTransportError: If the listing gets no response.
        """
        stored_id = await self._store.get(RECIPIENT_ID_KEY)
        name_start = f"{self._name_prefix}-"
        orphans: list[dict[str, Any]] = []
        for recipient in await self._client.list_recipients():
            if recipient.get("type") != "webhook":
                continue
            details = recipient.get("details") or {}
            name = str(details.get("webhook_name", ""))
            if name.startswith(name_start) and recipient.get("id") != stored_id:
                orphans.append({"id": recipient.get("id"), "webhook_name": name})
        return orphans

    async def _record(self, status: InstallationStatus) -> InstallationStatus:
        """Persist the status so it survives restarts and is visible via the API."""
        logger.info("Installation status: %s", status.state.value)
        await self._store.set(STATUS_KEY, status.state.value)
        await self._store.set(STATUS_DESCRIPTION_KEY, status.description or "")
        return status

    async def _record_failure(
        self, status: InstallationStatus,
    ) -> InstallationStatus:
        """Record a failure status; a store that is down is only logged."""
        try:
            return await self._record(status)
        except Exception:
            logger.exception(
                "Could not record installation status %s", status.state.value,
            )
            return status
