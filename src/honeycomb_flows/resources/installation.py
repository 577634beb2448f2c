"""Installation resource — protocol-agnostic recipient lifecycle operations."""

from __future__ import annotations

from typing import Any

from honeycomb_flows.clients.honeycomb_client import (
    HoneycombApiError,
    HoneycombTransportError,
)
from honeycomb_flows.services.recipient_service import RecipientService


class UpstreamError(Exception):
    """Raised when the Honeycomb API call behind an operation fails."""


class InstallationResource:
    """Install/uninstall hooks and status for the webhook recipient.

    Built once at startup with all dependencies pre-wired.
    """

    def __init__(self, *, recipient_service: RecipientService) -> None:
        self._service = recipient_service

    async def sync(self) -> dict[str, str | None]:
        """Run the install hook. Failures are reported in the returned status."""
        status = await self._service.sync()
        return status.to_dict()

    async def drain(self) -> dict[str, str | None]:
        """Run the uninstall hook. Failures are reported in the returned status."""
        status = await self._service.drain()
        return status.to_dict()

    async def status(self) -> dict[str, str | None]:
        """Return the last recorded installation status."""
        status = await self._service.status()
        return status.to_dict()

    async def orphans(self) -> list[dict[str, Any]]:
        """List upstream recipients this installation created but no longer tracks.

        Raises:
            UpstreamError: If the recipient listing fails.
        """
        try:
            return await self._service.find_orphans()
        except (HoneycombApiError, HoneycombTransportError) as error:
            raise UpstreamError(str(error)) from error
