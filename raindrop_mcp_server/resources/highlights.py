"""Highlight tools."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, Optional

from pydantic import Field

from ..raindrop_client import RaindropClient
from ..utils.logging import truncate
from ..utils.params import FieldList, Page, PerPage
from ..utils.projection import filter_api_response

logger = logging.getLogger("raindrop_mcp_server.resources.highlights")


async def list_highlights(
    collection_id: Annotated[Optional[int], Field(description="Collection ID (omit for all highlights)")] = None,
    page: Page = 0,
    perpage: PerPage = 25,
    fields: Annotated[
        FieldList,
        Field(
            description="Array of field names to include in the response "
            "(e.g., ['_id', 'text', 'color', 'note', 'created'])"
        ),
    ] = None,
) -> Dict[str, Any]:
    """Get all highlights or highlights from a specific collection.

    Supports pagination and field selection.
    """
    logger.debug(
        "Tool call: list_highlights(collection_id=%s, page=%s, perpage=%s, fields=%s)",
        collection_id, page, perpage, fields,
    )
    client = RaindropClient.from_env()
    result = await client.get_highlights(collection_id, {"page": page, "perpage": perpage})
    result = filter_api_response(result, fields)
    logger.debug("Tool result: list_highlights -> %s", truncate(str(result)))
    return result
