"""
Configuration management for the Crawl4AI MCP server using Pydantic Settings.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Constants for error messages
API_URL_ERROR = "CRAWL4AI_API_URL must be an http(s) URL"
LOG_LEVEL_ERROR = "LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Crawl4AIMCPSettings(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.
    """

    # Crawl4AI Service
    crawl4ai_api_url: str = Field(
        default="http://127.0.0.1:11235", alias="CRAWL4AI_API_URL"
    )
    crawl4ai_auth_token: str | None = Field(default=None, alias="CRAWL4AI_AUTH_TOKEN")
    request_timeout: float = Field(default=60.0, alias="REQUEST_TIMEOUT", gt=0)

    # Retry configuration with exponential backoff
    retry_count: int = Field(default=3, alias="RETRY_COUNT", ge=1, le=10)
    retry_initial_delay: float = Field(
        default=1.0,
        alias="RETRY_INITIAL_DELAY",
        ge=0.0,
        le=10.0,
        description="Delay in seconds before the second attempt",
    )
    retry_exponential_base: float = Field(
        default=2.0,
        alias="RETRY_EXPONENTIAL_BASE",
        ge=1.0,
        le=5.0,
        description="Base for exponential backoff calculation",
    )

    # Server Configuration
    transport: Literal["stdio", "http"] = Field(default="stdio", alias="MCP_TRANSPORT")
    server_host: str = Field(default="127.0.0.1", alias="SERVER_HOST")
    server_port: int = Field(default=8000, alias="SERVER_PORT", gt=0, le=65535)
    debug: bool = Field(default=False, alias="DEBUG")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, alias="LOG_FILE")
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")

    # Crawling defaults sent with every /crawl_direct request
    crawl_priority: int = Field(default=10, alias="CRAWL_PRIORITY")
    crawl_magic: bool = Field(default=True, alias="CRAWL_MAGIC")
    crawl_headless: bool = Field(default=True, alias="CRAWL_HEADLESS")
    crawl_page_timeout: int = Field(default=30000, alias="CRAWL_PAGE_TIMEOUT", gt=0)
    crawl_remove_overlays: bool = Field(default=True, alias="CRAWL_REMOVE_OVERLAYS")
    crawl_browser: str = Field(default="chromium", alias="CRAWL_BROWSER")
    crawl_scan_full_page: bool = Field(default=True, alias="CRAWL_SCAN_FULL_PAGE")
    crawl_user_agent_mode: str = Field(default="random", alias="CRAWL_USER_AGENT_MODE")
    crawl_device_type: str = Field(default="mobile", alias="CRAWL_DEVICE_TYPE")
    crawl_os_type: str = Field(default="android", alias="CRAWL_OS_TYPE")
    crawl_bypass_cache: bool = Field(default=True, alias="CRAWL_BYPASS_CACHE")
    crawl_ignore_images: bool = Field(default=True, alias="CRAWL_IGNORE_IMAGES")

    @field_validator("crawl4ai_api_url", mode="before")
    @classmethod
    def _validate_api_url(cls, v: str) -> str:
        value = str(v).strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(API_URL_ERROR)
        return value.rstrip("/")

    @field_validator("crawl4ai_auth_token", mode="before")
    @classmethod
    def _blank_token_is_none(cls, v: str | None) -> str | None:
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(LOG_LEVEL_ERROR)
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_log_directory(cls, v: str | None) -> str | None:
        if v:
            log_path = Path(str(v)).expanduser()
            log_path.parent.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def auth_enabled(self) -> bool:
        """Whether requests to the crawling service carry a bearer token."""
        return self.crawl4ai_auth_token is not None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


# Global settings instance
settings = Crawl4AIMCPSettings()


def get_settings() -> Crawl4AIMCPSettings:
    """Return the process-wide settings instance."""
    return settings
