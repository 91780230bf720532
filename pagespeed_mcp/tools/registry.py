"""
Tool registry used by the MCP transports.

The registry is built once at startup and handed to each transport; it is
read-only afterwards, so concurrent calls share it without locking.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from ..config import Settings, get_settings
from ..pagespeed import PageSpeedClient
from .base import BaseTool, ToolExecutionError, ToolMetadata, ToolResult, UnknownToolError
from .pagespeed import RunPageSpeedTestTool

logger = logging.getLogger("pagespeed_mcp.tools")


class ToolName(str, Enum):
    RUN_PAGESPEED_TEST = "run_pagespeed_test"


class ToolRegistry:
    """Immutable mapping from :class:`ToolName` to its handler."""

    def __init__(self, tools: Mapping[ToolName, BaseTool]) -> None:
        missing = [name.value for name in ToolName if name not in tools]
        if missing:
            raise RuntimeError(f"No handler registered for: {', '.join(missing)}")
        self._tools: Mapping[ToolName, BaseTool] = MappingProxyType(dict(tools))

    def __len__(self) -> int:
        return len(self._tools)

    def get(self, name: str) -> BaseTool:
        try:
            return self._tools[ToolName(name)]
        except ValueError:
            raise UnknownToolError(name) from None

    def list_tools(self) -> List[ToolMetadata]:
        return [self._tools[name].metadata() for name in ToolName]

    async def call_tool(self, name: str, arguments: Any) -> ToolResult:
        """Dispatch a call; every per-call failure comes back as an error result."""

        started = time.perf_counter()
        try:
            tool = self.get(name)
            payload = await tool.invoke(arguments)
            result = ToolResult.success(payload)
        except ToolExecutionError as exc:
            logger.warning("tool=%s failed: %s", name, exc)
            result = ToolResult.error(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error in tool %s", name)
            result = ToolResult.error(str(exc) or exc.__class__.__name__)
        elapsed = int((time.perf_counter() - started) * 1000)
        logger.info("tool=%s elapsed_ms=%s is_error=%s", name, elapsed, result.is_error)
        return result


def build_registry(
    settings: Optional[Settings] = None,
    client: Optional[PageSpeedClient] = None,
) -> ToolRegistry:
    settings = settings or get_settings()
    if client is None:
        client = PageSpeedClient(
            base_url=settings.api_url,
            timeout=settings.request_timeout_seconds,
        )
    return ToolRegistry({ToolName.RUN_PAGESPEED_TEST: RunPageSpeedTestTool(client)})


__all__ = [
    "ToolName",
    "ToolRegistry",
    "build_registry",
]
