"""
FastMCP tools for crawl4ai_mcp.
"""

from .crawling import register_crawling_tools

__all__ = ["register_crawling_tools"]
