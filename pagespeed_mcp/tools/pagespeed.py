"""PageSpeed Insights tool."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from ..pagespeed import PageSpeedClient
from .base import BaseTool

_URL_ADAPTER = TypeAdapter(AnyUrl)


class Strategy(str, Enum):
    MOBILE = "mobile"
    DESKTOP = "desktop"


class Category(str, Enum):
    ACCESSIBILITY = "accessibility"
    BEST_PRACTICES = "best-practices"
    PERFORMANCE = "performance"
    PWA = "pwa"
    SEO = "seo"


class RunPageSpeedTestArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    url: str = Field(..., description="URL of the page to analyze.")
    strategy: Strategy = Field(
        default=Strategy.MOBILE,
        description="Device strategy to emulate.",
    )
    category: List[Category] = Field(
        default_factory=lambda: [Category.PERFORMANCE],
        min_length=1,
        description="Lighthouse categories to run, in request order.",
    )
    locale: str = Field(default="en", description="Locale used for the report's strings.")
    api_key: Optional[str] = Field(
        default=None,
        alias="apiKey",
        description="Optional Google API key passed through to PageSpeed Insights.",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        # Checked, not normalised: the caller's URL goes out exactly as given.
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError as exc:
            reason = exc.errors()[0].get("msg", "invalid URL")
            raise PydanticCustomError("url_parsing", "Invalid url: {reason}", {"reason": reason}) from None
        return value


class RunPageSpeedTestTool(BaseTool[RunPageSpeedTestArgs]):
    name = "run_pagespeed_test"
    description = (
        "Run a PageSpeed Insights test on a URL. "
        "Tests page performance, accessibility, SEO, and best practices."
    )
    input_model = RunPageSpeedTestArgs

    def __init__(self, client: PageSpeedClient) -> None:
        self.client = client

    async def _run(self, arguments: RunPageSpeedTestArgs) -> Any:
        return await self.client.arun_test(arguments)


__all__ = [
    "Category",
    "RunPageSpeedTestArgs",
    "RunPageSpeedTestTool",
    "Strategy",
]
