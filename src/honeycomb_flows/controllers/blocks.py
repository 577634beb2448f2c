"""Blocks controller — thin HTTP adapter for BlocksResource."""

from __future__ import annotations

from typing import Any

from litestar import Controller, post
from litestar.exceptions import HTTPException

from honeycomb_flows.resources.blocks import (
    BlockValidationError,
    BlocksResource,
    NotConfiguredError,
    QueryTimeoutError,
)
from honeycomb_flows.resources.installation import UpstreamError


class BlocksController(Controller):
    """HTTP adapter for the Create Events and Run Query blocks."""

    path = "/api/blocks"

    @post("/events", status_code=200)
    async def create_events(
        self,
        data: dict[str, Any],
        blocks_resource: BlocksResource,
    ) -> list[dict[str, Any]]:
        """Send events to a dataset.

        Body: {"dataset_slug": "...", "batch": [{"data": {...}}, ...]}
        """
        dataset_slug = str(data.get("dataset_slug") or "").strip()
        try:
            return await blocks_resource.create_events(
                dataset_slug, data.get("batch"),
            )
        except BlockValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except NotConfiguredError as error:
            raise HTTPException(status_code=503, detail=str(error)) from error
        except UpstreamError as error:
            raise HTTPException(status_code=502, detail=str(error)) from error

    @post("/query", status_code=200)
    async def run_query(
        self,
        data: dict[str, Any],
        blocks_resource: BlocksResource,
    ) -> dict[str, Any]:
        """Run a saved query and wait for its result.

        Body: {"dataset_slug": "...", "query_id": "..."}
        """
        dataset_slug = str(data.get("dataset_slug") or "").strip()
        query_id = str(data.get("query_id") or "").strip()
        try:
            return await blocks_resource.run_query(dataset_slug, query_id)
        except BlockValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except NotConfiguredError as error:
            raise HTTPException(status_code=503, detail=str(error)) from error
        except QueryTimeoutError as error:
            raise HTTPException(status_code=504, detail=str(error)) from error
        except UpstreamError as error:
            raise HTTPException(status_code=502, detail=str(error)) from error
