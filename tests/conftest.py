from __future__ import annotations

import json
from typing import Any, List, Optional
from urllib.parse import parse_qsl, urlsplit

import pytest

from pagespeed_mcp import config
from pagespeed_mcp.pagespeed import PageSpeedClient
from pagespeed_mcp.tools.registry import ToolRegistry, build_registry


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, reason: str = "OK", text: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.text = text if text is not None else json.dumps(body if body is not None else {})
        self.closed = False

    def json(self) -> Any:
        return json.loads(self.text)

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.calls: List[dict] = []

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout})
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        pass

    @property
    def last_url(self) -> str:
        return self.calls[-1]["url"]

    def last_query(self) -> list:
        return parse_qsl(urlsplit(self.last_url).query)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in (
        "PAGESPEED_API_URL",
        "PAGESPEED_REQUEST_TIMEOUT",
        "MCP_TRANSPORT",
        "MCP_HOST",
        "MCP_PORT",
        "MCP_LOG_LEVEL",
        "MCP_ALLOWED_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession(FakeResponse(200, {"id": "example.com"}))


@pytest.fixture
def registry(session: FakeSession) -> ToolRegistry:
    return build_registry(client=PageSpeedClient(session=session))
