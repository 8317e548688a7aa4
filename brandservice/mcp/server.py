"""
MCP Server Entry Point
Registers the brand-service tools on an MCP server and serves it over stdio.
stdout carries protocol frames only; logs go to stderr.

To run: brandservice-mcp
Or: python -m brandservice.mcp.server
"""

import asyncio
import os
import sys
from typing import Any, Dict, List, Optional

import mcp.server.stdio
import mcp.types as types
from mcp.server import Server

from brandservice.config.settings import settings, validate_environment
from brandservice.mcp.tools import list_tools, call_tool
from brandservice.observability.logging import get_logger, setup_logging
from brandservice.services.session import Session
from brandservice.utils.exceptions import ConfigurationError, ToolResultError

logger = get_logger(__name__)

server = Server(settings.SERVER_NAME, version=settings.VERSION)

# One stdio connection per process, so one session
session = Session()


@server.list_tools()
async def handle_list_tools() -> List[types.Tool]:
    """Advertise the tool catalog"""
    return [types.Tool(**tool) for tool in list_tools()]


@server.call_tool()
async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
    """
    Execute a tool and convert the result into MCP content.

    Error-flagged results are raised as ToolResultError; the SDK reports
    exceptions from this handler as a tool result with isError set.
    """
    result = await call_tool(name, arguments or {}, session=session)
    if result.get("isError"):
        raise ToolResultError(result["content"][0]["text"])
    return [types.TextContent(type="text", text=block["text"]) for block in result["content"]]


def _handle_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]):
    """Unhandled task failures end the process"""
    logger.critical(
        "Unhandled exception in event loop",
        exc_info=context.get("exception"),
        extra={"loop_message": context.get("message")}
    )
    os._exit(1)


async def main():
    """Serve the MCP protocol over stdin/stdout until the client disconnects"""
    asyncio.get_running_loop().set_exception_handler(_handle_loop_exception)

    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def run():
    """Console entry point"""
    setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE, stream=sys.stderr)
    try:
        validate_environment()
    except ConfigurationError as e:
        logger.critical(e.message)
        sys.exit(1)

    logger.info("Starting MCP server", extra={"server_name": settings.SERVER_NAME, "transport": "stdio"})
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server shutting down")
    except Exception:
        logger.critical("Server error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
