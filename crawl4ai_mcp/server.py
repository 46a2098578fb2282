"""
Crawl4AI FastMCP Server - exposes a Crawl4AI service as the `crawl_urls` MCP tool.

The server forwards batches of URLs to a Crawl4AI REST endpoint, retries
transport failures with exponential backoff and returns the crawled pages
as markdown.
"""

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastmcp import FastMCP
from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

from .config import Crawl4AIMCPSettings, settings

SERVER_NAME = "crawl4ai-mcp"
SERVER_VERSION = "0.1.0"


def setup_logging(app_settings: Crawl4AIMCPSettings = settings) -> None:
    """Configure rich colorized logging on stderr for the application."""
    install(show_locals=app_settings.debug)

    # stdout carries the MCP stdio protocol, diagnostics go to stderr
    console = Console(stderr=True, width=120)

    rich_handler = RichHandler(
        console=console,
        show_path=app_settings.debug,
        show_time=True,
        rich_tracebacks=True,
        tracebacks_show_locals=app_settings.debug,
        markup=False,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=getattr(logging, app_settings.log_level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
    )

    if app_settings.log_to_file and app_settings.log_file:
        log_path = Path(app_settings.log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logging.getLogger().addHandler(file_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


setup_logging()
logger = logging.getLogger(__name__)

from .core import Crawl4AIClient, CrawlDispatcher, RetryPolicy  # noqa: E402
from .models.crawl import CrawlDefaults  # noqa: E402
from .tools import register_crawling_tools  # noqa: E402


def build_dispatcher(app_settings: Crawl4AIMCPSettings = settings) -> CrawlDispatcher:
    """Wire a dispatcher from settings; crawl defaults are fixed from here on."""
    return CrawlDispatcher(
        client=Crawl4AIClient.from_settings(app_settings),
        defaults=CrawlDefaults.from_settings(app_settings),
        retry_policy=RetryPolicy.from_settings(app_settings),
    )


def create_server(
    app_settings: Crawl4AIMCPSettings = settings,
    dispatcher: CrawlDispatcher | None = None,
) -> FastMCP:
    """Create the FastMCP server with the crawling tool."""
    dispatcher = dispatcher or build_dispatcher(app_settings)

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
        try:
            yield {}
        finally:
            await dispatcher.client.close()

    server = FastMCP(SERVER_NAME, lifespan=lifespan)
    register_crawling_tools(server, dispatcher)
    return server


# Create FastMCP instance
mcp = create_server()


async def startup_checks(app_settings: Crawl4AIMCPSettings = settings) -> bool:
    """Log the effective configuration and probe the crawling service once."""
    logger.info(f"Starting {SERVER_NAME} server v{SERVER_VERSION}")
    logger.info(f"API URL: {app_settings.crawl4ai_api_url}")
    logger.info(f"Authentication enabled: {app_settings.auth_enabled}")
    logger.info(
        f"Request timeout: {app_settings.request_timeout}s | "
        f"attempts: {app_settings.retry_count}"
    )

    async with Crawl4AIClient.from_settings(app_settings) as client:
        healthy = await client.health_check()

    if healthy:
        logger.info("Successfully connected to Crawl4AI API")
    else:
        logger.warning("Could not connect to Crawl4AI API")
        logger.warning(
            "The server will still run, but API calls may fail until the "
            "connection is restored"
        )
    return healthy


# CLI entry point
def main() -> None:
    """Main entry point for the CLI."""
    try:
        console = Console(stderr=True)
        console.print("\n[bold blue]Crawl4AI MCP Server[/bold blue]")
        console.print("[dim]Markdown crawling through a Crawl4AI service[/dim]\n")

        asyncio.run(startup_checks())

        if settings.transport == "http":
            import uvicorn

            logger.info(
                f"Starting FastMCP server on {settings.server_host}:{settings.server_port}"
            )
            uvicorn.run(
                mcp.http_app(),
                host=settings.server_host,
                port=settings.server_port,
                log_level="info" if settings.debug else "warning",
            )
        else:
            logger.info("Crawl4AI MCP server running on stdio")
            mcp.run(transport="stdio")

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Failed to start MCP server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
