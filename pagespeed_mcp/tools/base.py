"""
Base classes and helper utilities for MCP tools.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Generic, List, Literal, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError


InputModelT = TypeVar("InputModelT", bound=BaseModel)


class ToolExecutionError(RuntimeError):
    """Raised when a tool fails in a controlled manner."""


class UnknownToolError(ToolExecutionError):
    """Raised when a call names a tool that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArgumentsError(ToolExecutionError):
    """Raised when call arguments fail the tool's input model."""

    def __init__(self, tool_name: str, detail: str) -> None:
        super().__init__(f"Invalid arguments for {tool_name}: {detail}")
        self.tool_name = tool_name
        self.detail = detail


class ToolMetadata(BaseModel):
    """Serializable metadata for tool registration."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(alias="inputSchema", serialization_alias="inputSchema")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Terminal response of a tool call, success or failure."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    content: List[TextContent]
    is_error: bool = Field(default=False, alias="isError", serialization_alias="isError")

    @classmethod
    def success(cls, payload: Any) -> "ToolResult":
        return cls(content=[TextContent(text=render_json(payload))], is_error=False)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)

    @property
    def text(self) -> str:
        return "".join(item.text for item in self.content)


def render_json(payload: Any) -> str:
    """Pretty-print a JSON value with two-space indentation."""

    return json.dumps(payload, indent=2, ensure_ascii=False)


def summarize_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a single line."""

    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "arguments"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


class BaseTool(ABC, Generic[InputModelT]):
    """Abstract base class for all tools."""

    name: ClassVar[str]
    description: ClassVar[str]
    input_model: ClassVar[Type[InputModelT]]

    @classmethod
    def metadata(cls) -> ToolMetadata:
        """Return metadata for registering the tool with the MCP server."""

        return ToolMetadata(
            name=cls.name,
            description=cls.description,
            input_schema=cls.input_model.model_json_schema(by_alias=True),
        )

    def parse_arguments(self, raw_args: Any) -> InputModelT:
        """Validate raw call arguments into the tool's input model."""

        try:
            return self.input_model.model_validate({} if raw_args is None else raw_args)
        except ValidationError as exc:
            raise InvalidArgumentsError(self.name, summarize_validation_error(exc)) from exc

    async def invoke(self, raw_args: Any) -> Any:
        """Validate input, execute tool logic, and return its JSON result."""

        args = self.parse_arguments(raw_args)
        return await self._run(args)

    @abstractmethod
    async def _run(self, arguments: InputModelT) -> Any:
        """Execute the tool."""
