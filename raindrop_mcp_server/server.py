"""MCP server for Raindrop.io — tool registration."""

from __future__ import annotations

from fastmcp import FastMCP

from .resources import (
    collections,
    raindrops,
    tags,
    highlights,
    imports,
)
from .utils.logging import setup_logging

setup_logging()

SERVER_NAME = "raindrop-mcp"


def create_mcp_server(auth=None):
    """Create and configure the FastMCP server with all tools.

    Args:
        auth: Optional auth provider passed through to FastMCP
    """
    mcp = FastMCP(SERVER_NAME, auth=auth)

    # -- Tools: collections -------------------------------------------------
    mcp.tool(name="list-collections", title="List Collections")(collections.list_collections)
    mcp.tool(name="get-collection", title="Get Collection")(collections.get_collection)
    mcp.tool(name="create-collection", title="Create Collection")(collections.create_collection)
    mcp.tool(name="update-collection", title="Update Collection")(collections.update_collection)
    mcp.tool(name="delete-collection", title="Delete Collection")(collections.delete_collection)

    # -- Tools: raindrops ---------------------------------------------------
    mcp.tool(name="list-raindrops", title="List Raindrops")(raindrops.list_raindrops)
    mcp.tool(name="get-raindrop", title="Get Raindrop")(raindrops.get_raindrop)
    mcp.tool(name="create-raindrop", title="Create Raindrop")(raindrops.create_raindrop)
    mcp.tool(name="update-raindrop", title="Update Raindrop")(raindrops.update_raindrop)
    mcp.tool(name="delete-raindrop", title="Delete Raindrop")(raindrops.delete_raindrop)
    mcp.tool(name="search-raindrops", title="Search Raindrops")(raindrops.search_raindrops)

    # -- Tools: tags --------------------------------------------------------
    mcp.tool(name="list-tags", title="List Tags")(tags.list_tags)
    mcp.tool(name="merge-tags", title="Merge/Rename Tags")(tags.merge_tags)
    mcp.tool(name="delete-tags", title="Delete Tags")(tags.delete_tags)

    # -- Tools: highlights --------------------------------------------------
    mcp.tool(name="list-highlights", title="List Highlights")(highlights.list_highlights)

    # -- Tools: URL parsing -------------------------------------------------
    mcp.tool(name="parse-url", title="Parse URL")(imports.parse_url)
    mcp.tool(name="check-url-exists", title="Check URL Exists")(imports.check_url_exists)

    return mcp


# Default server instance for stdio transport
server = create_mcp_server()
