"""
PageSpeed Insights exposed as an MCP tool.

The package advertises a single ``run_pagespeed_test`` tool, validates calls
against its input model and relays the raw PageSpeed Insights report back to
the host over stdio (or, optionally, HTTP).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
