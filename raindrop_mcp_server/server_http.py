"""HTTP transport entry point (streamable HTTP via Starlette + uvicorn)."""

from __future__ import annotations

import logging
import os

from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route, Mount

from .server import create_mcp_server

logger = logging.getLogger("raindrop_mcp_server.server_http")


async def health(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({
        "status": "ok",
        "transport": "streamable-http",
        "token_configured": bool(os.getenv("RAINDROP_TOKEN")),
    })


mcp_server = create_mcp_server()


def create_app():
    """Create ASGI app with CORS middleware and a health route."""
    mcp_app = mcp_server.http_app()

    # IMPORTANT: Must pass mcp_app.lifespan to initialize FastMCP's session manager
    app = Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Mount("/", app=mcp_app),  # FastMCP handles /mcp
        ],
        lifespan=mcp_app.lifespan,
    )

    # Add CORS middleware for MCP Inspector and browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    return app


# Create the ASGI app for uvicorn
app = create_app()


def main() -> None:
    """Run MCP server with streamable HTTP transport."""
    import uvicorn

    if not os.getenv("RAINDROP_TOKEN"):
        logger.warning("RAINDROP_TOKEN is not set - every tool call will fail until it is")

    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info("Starting Raindrop.io MCP Server on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
