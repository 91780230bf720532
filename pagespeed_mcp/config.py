"""
Configuration handling for the PageSpeed MCP server.

Settings come from the environment (or a ``.env`` file) and may be overridden
at startup, e.g. from command line flags. The PageSpeed API key is deliberately
not part of the settings: it is only ever supplied per call.
"""

from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from . import __version__

DEFAULT_API_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"


class Settings(BaseSettings):
    """Server settings loaded from environment or startup overrides."""

    api_url: str = Field(
        DEFAULT_API_URL,
        alias="PAGESPEED_API_URL",
        description="PageSpeed Insights runPagespeed endpoint.",
    )
    request_timeout_seconds: Optional[float] = Field(
        default=None,
        alias="PAGESPEED_REQUEST_TIMEOUT",
        description="Outbound request timeout. Unset means no timeout.",
    )
    server_name: str = Field("pagespeed-server", alias="MCP_SERVER_NAME")
    server_version: str = Field(__version__, alias="MCP_SERVER_VERSION")
    transport: Literal["stdio", "http"] = Field("stdio", alias="MCP_TRANSPORT")
    app_host: str = Field("127.0.0.1", alias="MCP_HOST")
    app_port: int = Field(8081, alias="MCP_PORT")
    allowed_origins: list[str] = Field(default_factory=list, alias="MCP_ALLOWED_ORIGINS")
    log_level: str = Field("INFO", alias="MCP_LOG_LEVEL")
    environment: str = Field("production", alias="MCP_ENV")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True


_settings_cache: Optional[Settings] = None


def configure(overrides: Optional[Mapping[str, Any]] = None) -> Settings:
    """
    Populate the settings cache using optional mapping overrides.

    Values in ``overrides`` take precedence when provided; ``None`` values are
    skipped so unset command line flags fall back to the environment.
    """

    global _settings_cache
    base = Settings()  # type: ignore[call-arg]
    if overrides:
        cleaned = {key: value for key, value in overrides.items() if value is not None}
        _settings_cache = base.model_copy(update=cleaned)
    else:
        _settings_cache = base
    return _settings_cache


def get_settings() -> Settings:
    """Return the cached settings, loading from environment if necessary."""

    global _settings_cache
    if _settings_cache is None:
        _settings_cache = configure()
    return _settings_cache


def reset_settings() -> None:
    """Drop the cached settings so the next lookup re-reads the environment."""

    global _settings_cache
    _settings_cache = None
