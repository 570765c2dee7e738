"""Tag tools."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field

from ..raindrop_client import RaindropClient, RaindropClientError
from ..utils.logging import truncate
from ..utils.params import FieldList, MinimalFlag, TagNames
from ..utils.projection import filter_api_response
from ..utils.responses import message_response

logger = logging.getLogger("raindrop_mcp_server.resources.tags")


async def list_tags(
    collection_id: Annotated[Optional[int], Field(description="Collection ID (omit for all tags)")] = None,
    fields: Annotated[
        FieldList,
        Field(description="Array of field names to include in the response (e.g., ['_id', 'count'])"),
    ] = None,
) -> Dict[str, Any]:
    """Get all tags or tags from a specific collection.

    The Tags API returns every tag at once; there is no pagination.
    """
    logger.debug("Tool call: list_tags(collection_id=%s, fields=%s)", collection_id, fields)
    client = RaindropClient.from_env()
    result = await client.get_tags(collection_id)
    result = filter_api_response(result, fields)
    logger.debug("Tool result: list_tags -> %s", truncate(str(result)))
    return result


async def merge_tags(
    tags: Annotated[
        TagNames,
        Field(description="List of tag names to merge/rename (can be a single tag or multiple tags)"),
    ],
    new_tag: Annotated[
        str,
        Field(min_length=1, description="New tag name to replace all specified tags"),
    ],
    collection_id: Annotated[
        Optional[int],
        Field(description="Limit operation to specific collection (omit to apply across all collections)"),
    ] = None,
    minimal: MinimalFlag = False,
) -> str:
    """Merge multiple tags into a new tag name, or rename a single tag.

    All specified tags will be replaced with the new tag name across all bookmarks.
    """
    logger.debug(
        "Tool call: merge_tags(tags=%s, new_tag=%s, collection_id=%s)",
        tags, new_tag, collection_id,
    )
    if not tags:
        raise RaindropClientError(
            "Parameter 'tags' is required and must be a non-empty array of tag names"
        )
    if not new_tag or not new_tag.strip():
        raise RaindropClientError("Parameter 'new_tag' is required and cannot be empty")

    client = RaindropClient.from_env()
    await client.merge_tags(tags, new_tag, collection_id)

    if len(tags) == 1:
        message = "Tag renamed successfully"
    else:
        message = f"{len(tags)} tags merged into '{new_tag}' successfully"
    return message_response(message, minimal)


async def delete_tags(
    tags: Annotated[List[str], Field(description="Tags to delete")],
    collection_id: Annotated[Optional[int], Field(description="Limit to specific collection")] = None,
    minimal: MinimalFlag = False,
) -> str:
    """Delete one or more tags."""
    logger.debug("Tool call: delete_tags(tags=%s, collection_id=%s)", tags, collection_id)
    client = RaindropClient.from_env()
    await client.delete_tags(tags, collection_id)
    return message_response("Tags deleted successfully", minimal)
