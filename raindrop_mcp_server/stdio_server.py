"""Stdio transport server for local MCP hosts (e.g. Claude Desktop).

Usage:
    python -m raindrop_mcp_server.stdio_server

Environment Variables (required):
    RAINDROP_TOKEN - Raindrop.io API token

Environment Variables (optional):
    MCP_LOG_LEVEL - Logging level (default: INFO)
    MCP_LOG_FILE - Log file path with rotation
    RAINDROP_BASE_URL - API base URL (defaults to production)
"""

import logging
import os
import sys

from .server import server

logger = logging.getLogger("raindrop_mcp_server.stdio_server")


def main():
    """Run the MCP server using stdio transport.

    Refuses to start without RAINDROP_TOKEN, since every tool needs it.
    """
    if not os.getenv("RAINDROP_TOKEN"):
        logger.error("RAINDROP_TOKEN environment variable is not set")
        logger.error("Please set RAINDROP_TOKEN with your Raindrop.io API token")
        sys.exit(1)

    logger.info("Raindrop.io MCP server running on stdio")
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
