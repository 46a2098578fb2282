"""
HTTP client for the Crawl4AI REST service.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from ..config import Crawl4AIMCPSettings

logger = logging.getLogger(__name__)

CRAWL_ENDPOINT = "/crawl_direct"
HEALTH_ENDPOINT = "/health"


class Crawl4AIClient:
    """
    Thin async wrapper around the Crawl4AI endpoints used by this server.

    The underlying ``httpx.AsyncClient`` is created on first use and reused
    for every request until ``close()``; closing is safe to repeat.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:11235",
        auth_token: str | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Crawl4AIMCPSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Crawl4AIClient:
        return cls(
            base_url=settings.crawl4ai_api_url,
            auth_token=settings.crawl4ai_auth_token,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> Crawl4AIClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def headers(self) -> dict[str, str]:
        """Default request headers; Authorization only when a token is set."""
        headers: dict[str, str] = {}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def crawl_direct(self, payload: dict[str, Any]) -> httpx.Response:
        """
        POST a crawl payload to the service.

        Raises:
            httpx.HTTPStatusError: The service answered with a non-2xx status
            httpx.RequestError: The request could not be completed
        """
        response = await self.client.post(CRAWL_ENDPOINT, json=payload)
        response.raise_for_status()
        return response

    async def health_check(self) -> bool:
        """
        Check if the Crawl4AI service is reachable and healthy.
        """
        try:
            response = await self.client.get(HEALTH_ENDPOINT)
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning(f"Crawl4AI health check failed: {e}")
            return False
