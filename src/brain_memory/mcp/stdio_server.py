#!/usr/bin/env python3
"""
Brain Memory MCP server over stdio.

stdout carries the protocol, so all logging goes to stderr. Startup failures
(missing API key, unreachable store) terminate the process with a non-zero
exit code.
"""

import json
import sys
from typing import Any

import anyio
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from brain_memory import __version__
from brain_memory.core.config import load_settings
from brain_memory.core.logging import configure_logfire, get_logger, setup_logging
from brain_memory.mcp.tools import ToolCallFailed, ToolDispatcher
from brain_memory.services.context import MemoryContext, bootstrap

logger = get_logger(__name__)


def create_mcp_server(context: MemoryContext) -> Server:
    """Create the MCP server bound to an already-built context."""
    app = Server("brain-memory", version=__version__)
    dispatcher = ToolDispatcher(context)

    @app.list_tools()
    async def list_tools() -> list[types.Tool]:
        return dispatcher.list_tools()

    @app.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.ContentBlock]:
        payload, is_error = await dispatcher.call(name, arguments)
        if is_error:
            logger.warning(f"Tool {name} returned an error", error_code=payload.get("error_code"))
            raise ToolCallFailed(payload)
        return [types.TextContent(type="text", text=json.dumps(payload))]

    return app


async def serve() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, stream=sys.stderr)
    configure_logfire(settings.logfire_token)

    try:
        context = await bootstrap(settings)
    except Exception as e:
        logger.critical(f"Fatal error during startup: {e!s}", exc_info=True)
        raise SystemExit(1) from e

    app = create_mcp_server(context)
    logger.info("Brain Memory MCP server running on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def main() -> None:
    anyio.run(serve)


if __name__ == "__main__":
    main()
