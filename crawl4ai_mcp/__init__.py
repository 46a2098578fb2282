"""
crawl4ai-mcp - MCP server exposing a Crawl4AI service as a single crawling tool

- `crawl_urls` tool returning markdown with citations
- Batched requests to the Crawl4AI REST API
- Retries with exponential backoff
- Soft error replies for crawling service failures
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastmcp import FastMCP

__version__ = "0.1.0"
__description__ = "MCP server for the Crawl4AI crawling service"

from .config import settings

__all__ = ["get_main", "get_mcp", "settings"]


# Lazy imports so importing the package does not configure logging
def get_mcp() -> FastMCP:
    """Get the FastMCP server instance."""
    from .server import mcp

    return mcp


def get_main() -> Callable[[], None]:
    """Get the main CLI entry point function."""
    from .server import main

    return main
