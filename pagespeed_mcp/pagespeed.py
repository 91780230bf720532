"""
Client for the PageSpeed Insights ``runPagespeed`` endpoint.

One validated call maps to exactly one GET request. The report is returned as
parsed JSON, untouched. Nothing is cached and nothing is retried.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
from typing import TYPE_CHECKING, Any, List, Optional, Tuple
from urllib.parse import quote, urlencode

import requests

from .config import DEFAULT_API_URL
from .tools.base import ToolExecutionError

if TYPE_CHECKING:
    from .tools.pagespeed import RunPageSpeedTestArgs

logger = logging.getLogger("pagespeed_mcp.pagespeed")


class PageSpeedAPIError(ToolExecutionError):
    """The PageSpeed API could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PageSpeedResponseError(ToolExecutionError):
    """The PageSpeed API answered successfully but the body is not valid JSON."""


def _reject_constant(token: str) -> Any:
    raise ValueError(f"unexpected token {token}")


def _parse_float(token: str) -> Any:
    value = float(token)
    if math.isinf(value):
        return None
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def decode_report(text: str) -> Any:
    """
    Decode a report body as strict JSON.

    ``NaN`` and ``Infinity`` are rejected. Integral floats such as ``1.0``
    decode to ints and overflowing numbers to ``None``, matching how the
    report reads once it has been through a JavaScript JSON round trip.
    """

    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)


def build_query(params: "RunPageSpeedTestArgs") -> List[Tuple[str, str]]:
    """Return the ordered query parameters for a validated test request."""

    query: List[Tuple[str, str]] = [
        ("url", params.url),
        ("strategy", params.strategy.value),
    ]
    query.extend(("category", category.value) for category in params.category)
    query.append(("locale", params.locale))
    if params.api_key:
        query.append(("key", params.api_key))
    return query


def build_request_url(params: "RunPageSpeedTestArgs", base_url: str = DEFAULT_API_URL) -> str:
    """Build the full request URL; every value is percent-encoded."""

    return f"{base_url}?{urlencode(build_query(params), quote_via=quote)}"


class PageSpeedClient:
    """Issue PageSpeed Insights requests over a shared ``requests`` session."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url
        self.session = session or requests.Session()
        # None keeps the transport default: wait until the remote side answers.
        self.timeout = timeout

    def run_test(self, params: "RunPageSpeedTestArgs") -> Any:
        """Run a test and return the decoded JSON report."""

        url = build_request_url(params, self.base_url)
        logger.debug(
            "GET %s strategy=%s categories=%s",
            self.base_url,
            params.strategy.value,
            ",".join(category.value for category in params.category),
        )
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            detail = str(exc)
            if params.api_key:
                detail = detail.replace(params.api_key, "***")
            raise PageSpeedAPIError(f"PageSpeed API request failed: {detail}") from exc

        try:
            if not 200 <= response.status_code < 300:
                reason = response.reason or str(response.status_code)
                raise PageSpeedAPIError(
                    f"PageSpeed API error: {reason}",
                    status_code=response.status_code,
                )
            try:
                return decode_report(response.text)
            except ValueError as exc:
                raise PageSpeedResponseError(
                    f"Invalid JSON in PageSpeed API response: {exc}"
                ) from exc
        finally:
            response.close()

    async def arun_test(self, params: "RunPageSpeedTestArgs") -> Any:
        """Run :meth:`run_test` in a worker thread so the event loop stays free."""

        return await asyncio.to_thread(self.run_test, params)

    def close(self) -> None:
        self.session.close()
