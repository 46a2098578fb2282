"""
Core services for crawl4ai_mcp.
"""

from .client import Crawl4AIClient
from .dispatcher import CRAWL_TOOL_NAME, CrawlDispatcher
from .normalizer import extract_markdown, normalize_response, resolve_results
from .resilience import RetryPolicy

__all__ = [
    "CRAWL_TOOL_NAME",
    "Crawl4AIClient",
    "CrawlDispatcher",
    "RetryPolicy",
    "extract_markdown",
    "normalize_response",
    "resolve_results",
]
