"""FastAPI application factory: HTTP routes plus the MCP SSE transport."""

from typing import Any

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from ta_charts.server import routes


def create_app(mcp_server: FastMCP, lifespan: Any = None) -> FastAPI:
    """Create the HTTP application.

    Args:
        mcp_server: MCP server whose SSE transport (/sse, /messages/) is
                    mounted at the root.
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to open and close shared resources.

    Returns:
        Configured FastAPI application. Route handlers read services from
        app.state, which the lifespan populates.
    """
    app = FastAPI(title="TA Charts MCP Server", lifespan=lifespan)

    app.include_router(routes.router)

    # Mounted last: the root mount would otherwise shadow the routes above
    app.mount("/", mcp_server.sse_app())

    return app
