"""Health check controller — thin HTTP adapter."""

from __future__ import annotations

from litestar import Controller, get

from honeycomb_flows.resources.health import HealthResource


class HealthController(Controller):
    """HTTP adapter for health checks."""

    path = "/api"

    @get("/health")
    async def health(self, health_resource: HealthResource) -> dict[str, str]:
        """Return service health status."""
        return health_resource.check()
