"""
MCP stdio binding.

Registers ``tools/list`` and ``tools/call`` handlers on a low-level MCP
``Server`` and serves it over the process's stdin/stdout.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .config import Settings, get_settings
from .tools.base import ToolResult
from .tools.registry import ToolRegistry

logger = logging.getLogger("pagespeed_mcp.stdio")


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item.text) for item in result.content],
        isError=result.is_error,
    )


def create_server(registry: ToolRegistry, settings: Optional[Settings] = None) -> Server:
    """Build an MCP server whose tool handlers delegate to ``registry``."""

    settings = settings or get_settings()
    server: Server = Server(settings.server_name, version=settings.server_version)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=meta.name,
                description=meta.description,
                inputSchema=meta.input_schema,
            )
            for meta in registry.list_tools()
        ]

    # The registry validates arguments itself so errors keep their own wording.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        result = await registry.call_tool(name, arguments)
        return to_call_tool_result(result)

    return server


async def serve_stdio(registry: ToolRegistry, settings: Optional[Settings] = None) -> None:
    """Attach to stdin/stdout and serve until the host disconnects."""

    server = create_server(registry, settings)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("PageSpeed server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
