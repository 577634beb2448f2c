"""Installation controller — thin HTTP adapter for InstallationResource."""

from __future__ import annotations

from typing import Any

from litestar import Controller, get, post
from litestar.exceptions import HTTPException

from honeycomb_flows.resources.installation import InstallationResource, UpstreamError


class InstallationController(Controller):
    """Host install/uninstall hooks. Outcomes are reported as a status, not an HTTP error."""

    path = "/api/installation"

    @get("/")
    async def status(
        self, installation_resource: InstallationResource,
    ) -> dict[str, str | None]:
        """Return the last recorded installation status."""
        return await installation_resource.status()

    @post("/sync", status_code=200)
    async def sync(
        self, installation_resource: InstallationResource,
    ) -> dict[str, str | None]:
        """Validate credentials and provision the webhook recipient."""
        return await installation_resource.sync()

    @post("/drain", status_code=200)
    async def drain(
        self, installation_resource: InstallationResource,
    ) -> dict[str, str | None]:
        """Delete the webhook recipient and its stored secret."""
        return await installation_resource.drain()

    @get("/orphans")
    async def orphans(
        self, installation_resource: InstallationResource,
    ) -> list[dict[str, Any]]:
        """List upstream recipients left behind by interrupted installs."""
        try:
            return await installation_resource.orphans()
        except UpstreamError as error:
            raise HTTPException(status_code=502, detail=str(error)) from error
