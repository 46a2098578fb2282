"""
Pytest configuration and fixtures for crawl4ai-mcp testing.
"""

import logging
from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import pytest

from crawl4ai_mcp.core import RetryPolicy

# Suppress noisy transport logs during testing
logging.getLogger("httpx").setLevel(logging.CRITICAL)


@pytest.fixture
def no_sleep() -> Generator[AsyncMock, None, None]:
    """Replace backoff sleeps with an AsyncMock that records the delays."""
    with patch(
        "crawl4ai_mcp.core.resilience.asyncio.sleep", new_callable=AsyncMock
    ) as sleep:
        yield sleep


@pytest.fixture
def instant_retries() -> RetryPolicy:
    """Three attempts without waiting, for end-to-end tests."""
    return RetryPolicy(max_attempts=3, initial_delay=0.0)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove configuration variables so settings fall back to defaults."""
    for name in (
        "CRAWL4AI_API_URL",
        "CRAWL4AI_AUTH_TOKEN",
        "REQUEST_TIMEOUT",
        "RETRY_COUNT",
        "RETRY_INITIAL_DELAY",
        "RETRY_EXPONENTIAL_BASE",
        "MCP_TRANSPORT",
        "LOG_LEVEL",
        "CRAWL_HEADLESS",
        "CRAWL_PAGE_TIMEOUT",
        "CRAWL_DEVICE_TYPE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
