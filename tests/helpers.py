"""
Test helper functions for crawl4ai-mcp testing.

The Crawl4AI service is replaced by a scripted ``httpx.MockTransport`` so
the client, dispatcher and server run without network access.
"""

import json
from collections.abc import Callable
from typing import Any

import httpx

from crawl4ai_mcp.core import Crawl4AIClient, CrawlDispatcher, RetryPolicy
from crawl4ai_mcp.models.crawl import CrawlDefaults

TEST_API_URL = "http://crawl4ai.test:11235"

Outcome = httpx.Response | Exception | Callable[[httpx.Request], httpx.Response]


def connect_error(message: str = "Connection refused") -> Callable[[httpx.Request], Any]:
    """Outcome that fails the request at the transport level."""

    def _raise(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(message, request=request)

    return _raise


class FakeCrawlService:
    """
    Scripted stand-in for the Crawl4AI REST API.

    Each request consumes the next outcome; the last outcome repeats once the
    script is exhausted. Every request is recorded.
    """

    def __init__(self, *outcomes: Outcome):
        self.outcomes: list[Outcome] = list(outcomes) or [httpx.Response(200, json={})]
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(request)
        # Fresh response per request so repeated outcomes never share state
        return httpx.Response(
            outcome.status_code, headers=outcome.headers, content=outcome.content
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def json_bodies(self) -> list[Any]:
        return [json.loads(request.content) for request in self.requests]


def make_client(
    service: FakeCrawlService, auth_token: str | None = None
) -> Crawl4AIClient:
    return Crawl4AIClient(
        base_url=TEST_API_URL,
        auth_token=auth_token,
        timeout=5.0,
        transport=service.transport,
    )


def make_dispatcher(
    service: FakeCrawlService,
    auth_token: str | None = None,
    retry_policy: RetryPolicy | None = None,
) -> CrawlDispatcher:
    return CrawlDispatcher(
        client=make_client(service, auth_token=auth_token),
        defaults=CrawlDefaults(),
        retry_policy=retry_policy or RetryPolicy(),
    )
