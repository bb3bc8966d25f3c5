"""
MCP Server for Inventory Replenishment Analysis.

This server exposes the replenishment analysis via the Model Context Protocol.
Supports both stdio (local) and HTTP/SSE (remote) transports.
"""

import asyncio
import logging
import os
from typing import Any

from mcp.server import Server
from mcp.types import (
    Tool,
    TextContent,
    CallToolResult,
)

from .config import get_dataset, get_service_level_config
from .logging_config import setup_logging
from .tools import (
    get_tool_definitions,
    handle_run_replenishment_analysis,
    handle_get_replenishment_summary,
    handle_get_abc_summary,
    handle_get_reorder_recommendations,
    handle_get_transfer_suggestions,
    handle_get_item_analysis,
    handle_get_lead_times,
)


logger = logging.getLogger(__name__)

# Initialize MCP server
app = Server("replenishment-analysis")


# Define available tools
@app.list_tools()
async def list_tools() -> list[Tool]:
    """List all available replenishment analysis tools."""
    return get_tool_definitions()


def dispatch(name: str, arguments: dict[str, Any]) -> CallToolResult:
    """Load the dataset and configuration, then run the named tool."""
    dataset = get_dataset()
    config = get_service_level_config()

    if name == "run_replenishment_analysis":
        return handle_run_replenishment_analysis(dataset, config, arguments)

    elif name == "get_replenishment_summary":
        return handle_get_replenishment_summary(dataset, config, arguments)

    elif name == "get_reorder_recommendations":
        return handle_get_reorder_recommendations(dataset, config, arguments)

    elif name == "get_transfer_suggestions":
        return handle_get_transfer_suggestions(dataset, config, arguments)

    elif name == "get_abc_summary":
        return handle_get_abc_summary(dataset, config, arguments)

    elif name == "get_item_analysis":
        return handle_get_item_analysis(dataset, config, arguments)

    elif name == "get_lead_times":
        return handle_get_lead_times(dataset, config, arguments)

    else:
        return CallToolResult(
            content=[TextContent(
                type="text",
                text=f"Unknown tool: {name}"
            )],
            isError=True
        )


@app.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
    """Handle tool calls."""
    try:
        return dispatch(name, arguments or {})
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return CallToolResult(
            content=[TextContent(
                type="text",
                text=f"Error: {str(e)}"
            )],
            isError=True
        )


async def run_stdio():
    """Run the MCP server with stdio transport (for local use)."""
    from mcp.server.stdio import stdio_server
    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )


async def run_sse(host: str = "0.0.0.0", port: int = 8000):
    """Run the MCP server with SSE transport (for remote use)."""
    from mcp.server.sse import SseServerTransport
    from starlette.applications import Starlette
    from starlette.routing import Route, Mount
    from starlette.responses import JSONResponse, PlainTextResponse
    import uvicorn

    sse = SseServerTransport("/messages/")

    async def handle_sse(request):
        async with sse.connect_sse(
            request.scope, request.receive, request._send
        ) as streams:
            await app.run(
                streams[0], streams[1], app.create_initialization_options()
            )

    async def handle_messages(request):
        await sse.handle_post_message(request.scope, request.receive, request._send)

    async def health_check(request):
        return JSONResponse({"status": "healthy", "service": "replenishment-analysis-mcp"})

    async def root(request):
        return PlainTextResponse("Inventory Replenishment Analysis MCP Server is running. Connect via /sse endpoint.")

    starlette_app = Starlette(
        debug=False,
        routes=[
            Route("/", root),
            Route("/health", health_check),
            Route("/sse", handle_sse),
            Mount("/messages/", routes=[Route("/", handle_messages, methods=["POST"])]),
        ],
    )

    config = uvicorn.Config(starlette_app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)
    await server.serve()


def main():
    """Main entry point - determines transport based on environment."""
    setup_logging()

    # PORT set by the hosting platform, or MCP_TRANSPORT=sse
    port = os.environ.get("PORT")
    if port or os.environ.get("MCP_TRANSPORT", "stdio") == "sse":
        port = int(port or 8000)
        host = os.environ.get("HOST", "0.0.0.0")
        logger.info("Starting MCP server with SSE transport on %s:%s", host, port)
        asyncio.run(run_sse(host=host, port=port))
    else:
        # Default to stdio for local use
        asyncio.run(run_stdio())


if __name__ == "__main__":
    main()
