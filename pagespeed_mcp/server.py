"""
FastAPI application exposing the tool registry over HTTP.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import Settings, get_settings
from .tools.base import ToolResult
from .tools.registry import ToolRegistry

logger = logging.getLogger("pagespeed_mcp.server")


class InvokeRequest(BaseModel):
    tool: str = Field(..., description="Tool name")
    # Left untyped so malformed arguments are reported by the tool, in-band.
    arguments: Any = Field(default_factory=dict, description="Tool arguments")


class ToolListResponse(BaseModel):
    tools: List[Dict[str, Any]]


def create_app(registry: ToolRegistry, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="PageSpeed MCP Server", version=settings.server_version)

    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/healthz", tags=["system"])
    async def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/mcp/tools", response_model=ToolListResponse, tags=["mcp"])
    async def get_tools() -> ToolListResponse:
        return ToolListResponse(
            tools=[meta.model_dump(by_alias=True) for meta in registry.list_tools()]
        )

    @app.post("/mcp/invoke", tags=["mcp"])
    async def invoke(request: InvokeRequest) -> Dict[str, Any]:
        # Tool failures are part of the result, not HTTP errors.
        result: ToolResult = await registry.call_tool(request.tool, request.arguments)
        return result.model_dump(by_alias=True)

    return app
