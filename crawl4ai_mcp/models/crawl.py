"""
Data models for crawl requests and the fixed Crawl4AI crawl configuration.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

if TYPE_CHECKING:
    from ..config import Crawl4AIMCPSettings


class CrawlRequest(BaseModel):
    """Arguments of a `crawl_urls` tool call."""

    model_config = ConfigDict(extra="ignore")

    # Empty lists pass through to the crawling service unchanged.
    urls: list[StrictStr]


class UserAgentGeneratorConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    device_type: str = "mobile"
    os_type: str = "android"


class CrawlerParams(BaseModel):
    """Browser behaviour flags forwarded to Crawl4AI."""

    model_config = ConfigDict(frozen=True)

    headless: bool = True
    page_timeout: int = Field(default=30000, gt=0, description="Milliseconds")
    remove_overlay_elements: bool = True
    browser_type: str = "chromium"
    scan_full_page: bool = True
    user_agent_mode: str = "random"
    user_agent_generator_config: UserAgentGeneratorConfig = Field(
        default_factory=UserAgentGeneratorConfig
    )


class CrawlDefaults(BaseModel):
    """
    Fixed configuration merged into every /crawl_direct request body.

    Instances are immutable; build one at startup and hand it to the
    dispatcher.
    """

    model_config = ConfigDict(frozen=True)

    priority: int = 10
    magic: bool = True
    crawler_params: CrawlerParams = Field(default_factory=CrawlerParams)
    bypass_cache: bool = True
    ignore_images: bool = True

    @classmethod
    def from_settings(cls, settings: Crawl4AIMCPSettings) -> CrawlDefaults:
        """Build the crawl defaults from application settings."""
        return cls(
            priority=settings.crawl_priority,
            magic=settings.crawl_magic,
            crawler_params=CrawlerParams(
                headless=settings.crawl_headless,
                page_timeout=settings.crawl_page_timeout,
                remove_overlay_elements=settings.crawl_remove_overlays,
                browser_type=settings.crawl_browser,
                scan_full_page=settings.crawl_scan_full_page,
                user_agent_mode=settings.crawl_user_agent_mode,
                user_agent_generator_config=UserAgentGeneratorConfig(
                    device_type=settings.crawl_device_type,
                    os_type=settings.crawl_os_type,
                ),
            ),
            bypass_cache=settings.crawl_bypass_cache,
            ignore_images=settings.crawl_ignore_images,
        )

    def build_payload(self, urls: Sequence[str]) -> dict[str, Any]:
        """Return a fresh request body: these defaults plus ``urls``."""
        payload = self.model_dump()
        payload["urls"] = list(urls)
        return payload
