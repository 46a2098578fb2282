"""
Data models for crawl4ai_mcp using Pydantic.
"""

from .crawl import (
    CrawlDefaults,
    CrawlerParams,
    CrawlRequest,
    UserAgentGeneratorConfig,
)

__all__ = [
    "CrawlDefaults",
    "CrawlRequest",
    "CrawlerParams",
    "UserAgentGeneratorConfig",
]
