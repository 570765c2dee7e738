"""URL parsing and duplicate-check tools."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, List

from pydantic import Field

from ..raindrop_client import RaindropClient
from ..utils.logging import truncate

logger = logging.getLogger("raindrop_mcp_server.resources.imports")


async def parse_url(
    url: Annotated[str, Field(description="URL to parse")],
) -> Dict[str, Any]:
    """Parse and extract metadata from a URL."""
    logger.debug("Tool call: parse_url(url=%s)", url)
    client = RaindropClient.from_env()
    result = await client.parse_url(url)
    logger.debug("Tool result: parse_url -> %s", truncate(str(result)))
    return result


async def check_url_exists(
    urls: Annotated[List[str], Field(description="URLs to check")],
) -> Dict[str, Any]:
    """Check if URLs are already saved in your Raindrop.io account."""
    logger.debug("Tool call: check_url_exists(urls=%s)", urls)
    client = RaindropClient.from_env()
    result = await client.check_url_exists(urls)
    logger.debug("Tool result: check_url_exists -> %s", truncate(str(result)))
    return result
