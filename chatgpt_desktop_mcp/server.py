"""
MCP server exposing the ``chatgpt`` tool over stdio.

Tool calls are serialized with a lock and run off the event loop, so only
one automation sequence is ever in flight.
"""

from __future__ import annotations

from typing import Any, Dict, List

import anyio
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from chatgpt_desktop_mcp.context import AutomationContext
from chatgpt_desktop_mcp.dispatcher import TOOL_DEFINITION
from chatgpt_desktop_mcp.errors import FatalTransportError


SERVER_NAME = "ChatGPT MCP Tool"
SERVER_VERSION = "1.0.0"


def create_server(context: AutomationContext) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION)
    tool = types.Tool(**TOOL_DEFINITION)
    automation_lock = anyio.Lock()

    @server.list_tools()  # type: ignore
    async def list_tools() -> List[types.Tool]:
        return [tool]

    # Arguments are validated by the dispatcher so that bad input always
    # yields the "Invalid arguments" response.
    @server.call_tool(validate_input=False)  # type: ignore
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        async with automation_lock:
            response = await anyio.to_thread.run_sync(context.dispatcher.handle, name, arguments)
        return types.CallToolResult.model_validate(response.to_envelope())

    return server


async def serve(context: AutomationContext) -> None:
    """Run the stdio loop until the client closes stdin.

    Raises:
        FatalTransportError: the stdio channel failed
    """
    server = create_server(context)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    except Exception as e:
        raise FatalTransportError(str(e)) from e
