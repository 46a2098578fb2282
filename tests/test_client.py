"""
Test the HTTP client for the Crawl4AI service.
"""

import httpx
import pytest

from crawl4ai_mcp.config import Crawl4AIMCPSettings
from crawl4ai_mcp.core.client import Crawl4AIClient

from tests.helpers import TEST_API_URL, FakeCrawlService, connect_error, make_client


class TestCrawl4AIClient:
    @pytest.mark.unit
    async def test_crawl_direct_posts_payload(self):
        service = FakeCrawlService(httpx.Response(200, json={"results": []}))

        async with make_client(service) as client:
            response = await client.crawl_direct({"urls": ["https://a.test"], "magic": True})

        assert response.json() == {"results": []}
        request = service.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{TEST_API_URL}/crawl_direct"
        assert service.json_bodies[0] == {"urls": ["https://a.test"], "magic": True}

    @pytest.mark.unit
    async def test_bearer_token_sent_when_configured(self):
        service = FakeCrawlService()

        async with make_client(service, auth_token="secret") as client:
            await client.crawl_direct({"urls": []})

        assert service.requests[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.unit
    async def test_no_authorization_header_without_token(self):
        service = FakeCrawlService()

        async with make_client(service) as client:
            await client.crawl_direct({"urls": []})

        assert "Authorization" not in service.requests[0].headers

    @pytest.mark.unit
    async def test_error_status_raises(self):
        service = FakeCrawlService(httpx.Response(503, json={"detail": "busy"}))

        async with make_client(service) as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await client.crawl_direct({"urls": []})

        assert exc_info.value.response.status_code == 503

    @pytest.mark.unit
    async def test_health_check(self):
        healthy = FakeCrawlService(httpx.Response(200, json={"status": "ok"}))
        async with make_client(healthy) as client:
            assert await client.health_check() is True
        assert healthy.requests[0].method == "GET"
        assert str(healthy.requests[0].url) == f"{TEST_API_URL}/health"

        unhealthy = FakeCrawlService(httpx.Response(500))
        async with make_client(unhealthy) as client:
            assert await client.health_check() is False

        unreachable = FakeCrawlService(connect_error())
        async with make_client(unreachable) as client:
            assert await client.health_check() is False

    @pytest.mark.unit
    async def test_client_reused_and_recreated_after_close(self):
        service = FakeCrawlService()
        client = make_client(service)

        first = client.client
        assert client.client is first

        await client.close()
        await client.close()  # closing twice is harmless

        await client.crawl_direct({"urls": []})
        assert client.client is not first
        assert len(service.requests) == 1
        await client.close()

    @pytest.mark.unit
    def test_from_settings(self, clean_env):
        config = Crawl4AIMCPSettings(
            _env_file=None,
            CRAWL4AI_API_URL="http://crawler.internal:8080/",
            CRAWL4AI_AUTH_TOKEN="tkn",
            REQUEST_TIMEOUT=12,
        )

        client = Crawl4AIClient.from_settings(config)

        assert client.base_url == "http://crawler.internal:8080"
        assert client.headers == {"Authorization": "Bearer tkn"}
        assert client.timeout == 12
