"""
MCP server entrypoint for nunit-scaffold.

Exposes the scaffolding tools over stdio:
- scaffold_tests: one C# source (code or file) -> test files as text
- scaffold_files: many C# files -> test files on disk via the pipeline
"""


from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .handlers.core import HANDLERS, TOOLS

logger = logging.getLogger(__name__)

SERVER_NAME = "nunit-scaffold"

ToolHandler = Callable[[dict], Awaitable[list[TextContent]]]


async def dispatch(
    name: str,
    arguments: dict | None,
    handlers: dict[str, ToolHandler] = HANDLERS
) -> list[TextContent]:
    """Route one tool call to its handler."""
    handler = handlers.get(name)
    if handler is None:
        logger.warning(f"Unknown tool requested: {name}")
        return [TextContent(type="text", text=f"Unknown tool: {name}")]

    logger.info(f"Tool called: {name}")
    return await handler(arguments or {})


def create_server(
    tools: list[Tool] = TOOLS,
    handlers: dict[str, ToolHandler] = HANDLERS
) -> Server:
    """
    Build an MCP server advertising the given tools.

    Args:
        tools: Tool definitions returned by list_tools
        handlers: Tool name -> coroutine taking the call arguments
    """
    mcp_server = Server(SERVER_NAME)

    @mcp_server.list_tools()
    async def list_tools() -> list[Tool]:
        return list(tools)

    @mcp_server.call_tool()
    async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
        return await dispatch(name, arguments, handlers)

    return mcp_server


server = create_server()


async def run_server(mcp_server: Server = server) -> None:
    """Serve over stdio until the client disconnects."""
    logger.info(f"Starting {SERVER_NAME} {__version__} with tools: {[t.name for t in TOOLS]}")

    async with stdio_server() as (read_stream, write_stream):
        await mcp_server.run(
            read_stream,
            write_stream,
            mcp_server.create_initialization_options()
        )


def main():
    """Console script entry point."""
    logging.basicConfig(level=logging.INFO)
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
