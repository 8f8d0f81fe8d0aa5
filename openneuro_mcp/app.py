"""
ASGI application serving the MCP server over SSE.

Run with: uvicorn openneuro_mcp.app:app --host 0.0.0.0 --port 8001

SSE endpoint: http://localhost:8001/sse, client messages are posted under
/sse/messages/. Every other path answers 404 with a plain-text hint.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastmcp import FastMCP
from fastmcp.server.http import create_sse_app
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from .logging import setup_logging
from .server import SERVER_VERSION, close_relay, mcp_server

logger = setup_logging()

SSE_PATH = "/sse"
MESSAGE_PATH = "/sse/messages/"
NOT_FOUND_TEXT = "OpenNeuro MCP Server - Path not found.\nAvailable MCP paths:\n- /sse (for Server-Sent Events transport)"


async def not_found(request: Request, exc: Exception) -> PlainTextResponse:
    """Plain-text 404 listing the MCP paths."""
    logger.warning(f"OpenNeuro MCP Server. Requested path {request.url.path} not found. Listening for SSE on {SSE_PATH}.")
    return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the shared HTTP client on shutdown, if one was opened."""
    logger.info("OpenNeuro MCP Server initialized.")
    yield
    await close_relay()


def create_app(server: FastMCP = mcp_server) -> FastAPI:
    """Build the FastAPI app with the SSE transport mounted at the root."""
    sse_app = create_sse_app(server=server, message_path=MESSAGE_PATH, sse_path=SSE_PATH)
    sse_app.add_exception_handler(404, not_found)

    # No docs or OpenAPI routes: only /sse is served
    app = FastAPI(
        title="OpenNeuro MCP",
        version=SERVER_VERSION,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    # Mount at root so the SSE route stays /sse (not /sse/sse)
    app.mount("/", sse_app)
    return app


app = create_app()
