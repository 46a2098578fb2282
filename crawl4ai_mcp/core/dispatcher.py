"""
Request dispatcher for the ``crawl_urls`` tool.

Validates tool arguments, sends the batched crawl request with retries and
turns the outcome into an MCP ``CallToolResult``. Transport failures become
soft error results (``isError=True``); validation failures and empty
responses are raised as ``McpError`` protocol faults.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    CallToolResult,
    ErrorData,
    TextContent,
)
from pydantic import ValidationError

from ..models.crawl import CrawlDefaults, CrawlRequest
from .client import Crawl4AIClient
from .normalizer import normalize_response
from .resilience import RetryPolicy

logger = logging.getLogger(__name__)

CRAWL_TOOL_NAME = "crawl_urls"
CRAWL_TOOL_DESCRIPTION = (
    "Crawl one or more URLs and return markdown content with citations"
)
EMPTY_RESPONSE_MESSAGE = "Empty response from crawling service"
INVALID_PARAMS_MESSAGE = "Invalid crawl request parameters"


def parse_crawl_request(arguments: Any) -> CrawlRequest:
    """
    Validate raw tool arguments.

    Raises:
        McpError: INVALID_PARAMS when ``arguments`` is not an object with a
            ``urls`` list of strings
    """
    if not isinstance(arguments, dict):
        raise McpError(ErrorData(code=INVALID_PARAMS, message=INVALID_PARAMS_MESSAGE))
    try:
        return CrawlRequest.model_validate(arguments)
    except ValidationError as e:
        logger.debug(f"Rejected crawl arguments: {e}")
        raise McpError(
            ErrorData(code=INVALID_PARAMS, message=INVALID_PARAMS_MESSAGE)
        ) from e


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _describe_request(error: httpx.HTTPError) -> str:
    try:
        request = error.request
    except RuntimeError:
        return "Unknown request"
    return f"{request.method.upper()} {request.url}"


def _service_message(error: httpx.HTTPError) -> str:
    fallback = str(error) or error.__class__.__name__
    if not isinstance(error, httpx.HTTPStatusError):
        return fallback
    try:
        data = error.response.json()
    except ValueError:
        return fallback
    if isinstance(data, dict):
        for key in ("message", "detail"):
            if data.get(key):
                return str(data[key])
    return fallback


def transport_error_result(error: httpx.HTTPError) -> CallToolResult:
    """Build the soft error reply for a failed crawling service call."""
    status_code = (
        error.response.status_code
        if isinstance(error, httpx.HTTPStatusError)
        else None
    )
    message = _service_message(error)
    logger.error(f"API Error ({status_code}): {message}")

    status = status_code if status_code is not None else "no response"
    text = (
        f"Crawling service error ({status}) for {_describe_request(error)}: "
        f"{message}"
    )
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=True)


class CrawlDispatcher:
    """
    Executes crawl tool calls against the Crawl4AI service.
    """

    def __init__(
        self,
        client: Crawl4AIClient,
        defaults: CrawlDefaults | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        self.client = client
        self.defaults = defaults or CrawlDefaults()
        self.retry_policy = retry_policy or RetryPolicy()

    async def call_tool(self, name: str, arguments: Any) -> CallToolResult:
        """Dispatch a raw tool call by name."""
        if name != CRAWL_TOOL_NAME:
            raise McpError(
                ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}")
            )
        request = parse_crawl_request(arguments)
        return await self.crawl(request.urls)

    async def crawl(self, urls: Sequence[str]) -> CallToolResult:
        """
        Crawl ``urls`` in one batched request and return their markdown.

        Raises:
            McpError: INTERNAL_ERROR when the service returns an empty body
        """
        logger.info(f"Crawling URLs: {', '.join(urls)}")
        logger.debug(
            f"API URL: {self.client.base_url} | "
            f"Authentication enabled: {bool(self.client.auth_token)}"
        )
        payload = self.defaults.build_payload(urls)

        try:
            response = await self.retry_policy.run(
                lambda: self.client.crawl_direct(payload),
                exceptions=(httpx.HTTPError,),
                operation="crawl_direct",
            )
        except httpx.HTTPError as e:
            return transport_error_result(e)

        body = _decode_body(response)
        # null, "", 0 and false all count as no content; {} and [] do not
        if body is None or (not isinstance(body, (dict, list)) and not body):
            raise McpError(ErrorData(code=INTERNAL_ERROR, message=EMPTY_RESPONSE_MESSAGE))

        text = normalize_response(body)
        return CallToolResult(content=[TextContent(type="text", text=text)])
