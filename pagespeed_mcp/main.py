"""
Entrypoint for running the PageSpeed MCP server.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from .config import Settings, configure
from .tools.registry import ToolRegistry, build_registry

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("pagespeed_mcp")


def configure_logging(level: str) -> None:
    """Send package logs to stderr; stdout is reserved for the stdio protocol."""

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    for name in ("pagespeed_mcp", "uvicorn", "uvicorn.error", "uvicorn.access"):
        target = logging.getLogger(name)
        target.handlers = [handler]
        target.setLevel(level.upper())
        target.propagate = False


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pagespeed-mcp",
        description="Expose Google PageSpeed Insights as an MCP tool.",
    )
    parser.add_argument("--transport", choices=["stdio", "http"], default=None)
    parser.add_argument("--host", default=None, help="HTTP transport bind address")
    parser.add_argument("--port", type=int, default=None, help="HTTP transport port")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def serve(settings: Settings, registry: ToolRegistry) -> None:
    if settings.transport == "http":
        import uvicorn

        from .server import create_app

        logger.info("Starting PageSpeed server on %s:%s", settings.app_host, settings.app_port)
        uvicorn.run(
            create_app(registry, settings),
            host=settings.app_host,
            port=settings.app_port,
            log_config=None,
            log_level=settings.log_level.lower(),
        )
        return

    from .stdio import serve_stdio

    asyncio.run(serve_stdio(registry, settings))


def run(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        settings = configure(
            {
                "transport": args.transport,
                "app_host": args.host,
                "app_port": args.port,
                "log_level": args.log_level,
            }
        )
        configure_logging(settings.log_level)
        serve(settings, build_registry(settings))
    except KeyboardInterrupt:
        return
    except Exception as exc:
        print(f"Fatal error running server: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
