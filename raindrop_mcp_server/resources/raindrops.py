"""Raindrop (bookmark) tools."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, Optional

from pydantic import Field

from ..raindrop_client import RaindropClient
from ..utils.logging import truncate
from ..utils.params import FieldPresetOrList, MinimalFlag, Page, PerPage, SortOrder, TagList
from ..utils.projection import filter_api_response
from ..utils.responses import MINIMAL_RESPONSE, message_response, minimal_response

logger = logging.getLogger("raindrop_mcp_server.resources.raindrops")

FIELDS_HINT = (
    "Field selection: Use preset ('minimal', 'basic', 'standard', 'media', "
    "'organization', 'metadata') or array of field names"
)


async def list_raindrops(
    collection_id: Annotated[int, Field(description="Collection ID (0 for all, -1 for Unsorted, -99 for Trash)")],
    page: Page = 0,
    perpage: PerPage = 25,
    sort: Annotated[Optional[SortOrder], Field(description="Sort order")] = None,
    search: Annotated[Optional[str], Field(description="Search query")] = None,
    nested: Annotated[Optional[bool], Field(description="Include bookmarks from nested collections")] = None,
    fields: Annotated[FieldPresetOrList, Field(description=FIELDS_HINT)] = None,
) -> Dict[str, Any]:
    """Get raindrops from a collection with pagination and field selection support.

    Available presets:
    - minimal: _id, link, title
    - basic: _id, link, title, excerpt, tags, created, domain
    - standard: basic + note, type, cover, lastUpdate, important
    - media: _id, link, title, cover, media, type, file
    - organization: _id, title, tags, collection, collectionId, sort, removed
    - metadata: _id, created, lastUpdate, creatorRef, user, broken, cache
    """
    logger.debug(
        "Tool call: list_raindrops(collection_id=%s, page=%s, perpage=%s, sort=%s, search=%s, fields=%s)",
        collection_id, page, perpage, sort, search, fields,
    )
    client = RaindropClient.from_env()
    params = {
        "page": page,
        "perpage": perpage,
        "sort": sort,
        "search": search,
        "nested": nested,
    }
    result = await client.get_raindrops(collection_id, params)
    result = filter_api_response(result, fields)
    logger.debug("Tool result: list_raindrops -> %s", truncate(str(result)))
    return result


async def get_raindrop(
    raindrop_id: Annotated[int, Field(description="Raindrop ID")],
    fields: Annotated[FieldPresetOrList, Field(description=FIELDS_HINT)] = None,
) -> Dict[str, Any]:
    """Get a specific raindrop/bookmark by ID with field selection support."""
    logger.debug("Tool call: get_raindrop(raindrop_id=%s, fields=%s)", raindrop_id, fields)
    client = RaindropClient.from_env()
    result = await client.get_raindrop(raindrop_id)
    result = filter_api_response(result, fields)
    logger.debug("Tool result: get_raindrop -> %s", truncate(str(result)))
    return result


async def create_raindrop(
    link: Annotated[str, Field(description="URL of the bookmark")],
    title: Annotated[Optional[str], Field(description="Title (will be auto-parsed if not provided)")] = None,
    excerpt: Annotated[Optional[str], Field(description="Description/excerpt")] = None,
    note: Annotated[Optional[str], Field(description="Personal note")] = None,
    tags: Annotated[TagList, Field(description="Tags for the bookmark")] = None,
    collection_id: Annotated[Optional[int], Field(description="Collection ID (default: -1 for Unsorted)")] = None,
    important: Annotated[Optional[bool], Field(description="Mark as favorite")] = None,
    please_parse: Annotated[bool, Field(description="Auto-parse metadata from URL")] = True,
    minimal: MinimalFlag = False,
) -> Any:
    """Create a new raindrop/bookmark."""
    logger.debug(
        "Tool call: create_raindrop(link=%s, collection_id=%s, tags=%s)",
        link, collection_id, tags,
    )
    data: Dict[str, Any] = {"link": link}
    if title:
        data["title"] = title
    if excerpt:
        data["excerpt"] = excerpt
    if note:
        data["note"] = note
    if tags:
        data["tags"] = tags
    if collection_id is not None:
        data["collection"] = {"$id": collection_id}
    if important is not None:
        data["important"] = important
    if please_parse:
        # An empty object asks Raindrop.io to fetch title, cover, etc. in the background
        data["pleaseParse"] = {}

    client = RaindropClient.from_env()
    result = await client.create_raindrop(data)
    logger.debug("Tool result: create_raindrop -> %s", truncate(str(result)))
    return minimal_response(result, minimal)


async def update_raindrop(
    raindrop_id: Annotated[int, Field(description="Raindrop ID")],
    title: Annotated[Optional[str], Field(description="New title")] = None,
    excerpt: Annotated[Optional[str], Field(description="New description")] = None,
    note: Annotated[Optional[str], Field(description="New note")] = None,
    tags: Annotated[TagList, Field(description="New tags (replaces existing)")] = None,
    link: Annotated[Optional[str], Field(description="New URL")] = None,
    collection_id: Annotated[Optional[int], Field(description="Move to different collection")] = None,
    important: Annotated[Optional[bool], Field(description="Mark/unmark as favorite")] = None,
    order: Annotated[Optional[int], Field(description="Sort order position")] = None,
    fields: Annotated[
        FieldPresetOrList,
        Field(description=FIELDS_HINT + ", or empty array [] to return only result status"),
    ] = None,
    minimal: MinimalFlag = False,
) -> Any:
    """Update an existing raindrop/bookmark with field selection support."""
    logger.debug("Tool call: update_raindrop(raindrop_id=%s, fields=%s)", raindrop_id, fields)
    updates = {
        "title": title,
        "excerpt": excerpt,
        "note": note,
        "tags": tags,
        "link": link,
        "important": important,
        "order": order,
    }
    data: Dict[str, Any] = {k: v for k, v in updates.items() if v is not None}
    if collection_id is not None:
        data["collection"] = {"$id": collection_id}

    client = RaindropClient.from_env()
    result = await client.update_raindrop(raindrop_id, data)

    if minimal:
        return MINIMAL_RESPONSE

    result = filter_api_response(result, fields)
    logger.debug("Tool result: update_raindrop -> %s", truncate(str(result)))
    return result


async def delete_raindrop(
    raindrop_id: Annotated[int, Field(description="Raindrop ID to delete")],
    minimal: MinimalFlag = False,
) -> str:
    """Delete a raindrop/bookmark (moves to Trash, or permanently deletes if already in Trash)."""
    logger.debug("Tool call: delete_raindrop(raindrop_id=%s)", raindrop_id)
    client = RaindropClient.from_env()
    await client.delete_raindrop(raindrop_id)
    return message_response("Raindrop deleted successfully", minimal)


async def search_raindrops(
    search: Annotated[str, Field(description="Search query (supports operators like #tag, site:example.com, etc.)")],
    collection_id: Annotated[int, Field(description="Collection to search in (0 for all)")] = 0,
    page: Page = 0,
    perpage: PerPage = 25,
    sort: Annotated[Optional[SortOrder], Field(description="Sort order")] = None,
    fields: Annotated[FieldPresetOrList, Field(description=FIELDS_HINT)] = None,
) -> Dict[str, Any]:
    """Search for raindrops using Raindrop.io's search syntax.

    Supports pagination and the same field selection as list-raindrops.
    """
    logger.debug(
        "Tool call: search_raindrops(search=%s, collection_id=%s, page=%s, perpage=%s)",
        search, collection_id, page, perpage,
    )
    client = RaindropClient.from_env()
    result = await client.search_raindrops(
        collection_id, search, {"page": page, "perpage": perpage, "sort": sort}
    )
    result = filter_api_response(result, fields)
    logger.debug("Tool result: search_raindrops -> %s", truncate(str(result)))
    return result
