"""Collection tools."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field

from ..raindrop_client import RaindropClient
from ..utils.logging import truncate
from ..utils.params import CollectionView, FieldList, MinimalFlag
from ..utils.projection import filter_api_response
from ..utils.responses import message_response, minimal_response

logger = logging.getLogger("raindrop_mcp_server.resources.collections")

COLLECTION_FIELDS_HINT = (
    "Array of field names to include in the response "
    "(e.g., ['_id', 'title', 'count', 'public', 'parent'])"
)


async def list_collections(
    root: Annotated[bool, Field(description="Get root collections (true) or nested collections (false)")] = True,
    fields: Annotated[FieldList, Field(description=COLLECTION_FIELDS_HINT)] = None,
) -> Dict[str, Any]:
    """Get all root or nested collections.

    The Collections API returns every collection at once; there is no pagination.
    """
    logger.debug("Tool call: list_collections(root=%s, fields=%s)", root, fields)
    client = RaindropClient.from_env()
    result = await client.get_collections(root=root)
    result = filter_api_response(result, fields)
    logger.debug("Tool result: list_collections -> %s", truncate(str(result)))
    return result


async def get_collection(
    collection_id: Annotated[int, Field(description="Collection ID")],
    fields: Annotated[FieldList, Field(description=COLLECTION_FIELDS_HINT)] = None,
) -> Dict[str, Any]:
    """Get details of a specific collection with field selection support."""
    logger.debug("Tool call: get_collection(collection_id=%s, fields=%s)", collection_id, fields)
    client = RaindropClient.from_env()
    result = await client.get_collection(collection_id)
    result = filter_api_response(result, fields)
    logger.debug("Tool result: get_collection -> %s", truncate(str(result)))
    return result


async def create_collection(
    title: Annotated[str, Field(description="Name of the collection")],
    description: Annotated[Optional[str], Field(description="Collection description")] = None,
    parent_id: Annotated[Optional[int], Field(description="Parent collection ID for nested collections")] = None,
    view: Annotated[CollectionView, Field(description="View style")] = "list",
    public: Annotated[bool, Field(description="Make collection public")] = False,
    cover: Annotated[Optional[List[str]], Field(description="Collection cover URL")] = None,
    minimal: MinimalFlag = False,
) -> Any:
    """Create a new collection."""
    logger.debug(
        "Tool call: create_collection(title=%s, parent_id=%s, view=%s, public=%s)",
        title, parent_id, view, public,
    )
    data: Dict[str, Any] = {"title": title, "view": view, "public": public}
    if description:
        data["description"] = description
    if parent_id:
        data["parent"] = {"$id": parent_id}
    if cover:
        data["cover"] = cover

    client = RaindropClient.from_env()
    result = await client.create_collection(data)
    logger.debug("Tool result: create_collection -> %s", truncate(str(result)))
    return minimal_response(result, minimal)


async def update_collection(
    collection_id: Annotated[int, Field(description="Collection ID")],
    title: Annotated[Optional[str], Field(description="New name of the collection")] = None,
    description: Annotated[Optional[str], Field(description="New description")] = None,
    parent_id: Annotated[Optional[int], Field(description="New parent collection ID")] = None,
    view: Annotated[Optional[CollectionView], Field(description="View style")] = None,
    public: Annotated[Optional[bool], Field(description="Make collection public/private")] = None,
    expanded: Annotated[Optional[bool], Field(description="Expand/collapse sub-collections")] = None,
    minimal: MinimalFlag = False,
) -> Any:
    """Update an existing collection. Only the provided values are sent."""
    logger.debug("Tool call: update_collection(collection_id=%s)", collection_id)
    data: Dict[str, Any] = {}
    if title is not None:
        data["title"] = title
    if description is not None:
        data["description"] = description
    if parent_id is not None:
        data["parent"] = {"$id": parent_id}
    if view is not None:
        data["view"] = view
    if public is not None:
        data["public"] = public
    if expanded is not None:
        data["expanded"] = expanded

    client = RaindropClient.from_env()
    result = await client.update_collection(collection_id, data)
    logger.debug("Tool result: update_collection -> %s", truncate(str(result)))
    return minimal_response(result, minimal)


async def delete_collection(
    collection_id: Annotated[int, Field(description="Collection ID to delete")],
    minimal: MinimalFlag = False,
) -> str:
    """Remove a collection and all its descendants. Raindrops will be moved to Trash."""
    logger.debug("Tool call: delete_collection(collection_id=%s)", collection_id)
    client = RaindropClient.from_env()
    await client.delete_collection(collection_id)
    return message_response("Collection deleted successfully", minimal)
