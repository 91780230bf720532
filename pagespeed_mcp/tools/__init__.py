"""Tool implementations exposed by the MCP server."""

from .base import BaseTool, ToolExecutionError, ToolMetadata, ToolResult

__all__ = [
    "BaseTool",
    "ToolExecutionError",
    "ToolMetadata",
    "ToolResult",
]
