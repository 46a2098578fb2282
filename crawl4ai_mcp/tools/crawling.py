"""
MCP tool handlers for web crawling operations.
"""

import logging

from fastmcp import FastMCP
from mcp import types

from ..core.dispatcher import CRAWL_TOOL_DESCRIPTION, CRAWL_TOOL_NAME, CrawlDispatcher
from ..middleware import ErrorHandlingMiddleware, LoggingMiddleware

logger = logging.getLogger(__name__)

CRAWL_TOOL = types.Tool(
    name=CRAWL_TOOL_NAME,
    description=CRAWL_TOOL_DESCRIPTION,
    inputSchema={
        "type": "object",
        "properties": {
            "urls": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Array of URLs to crawl",
            },
        },
        "required": ["urls"],
    },
)


def register_crawling_tools(mcp: FastMCP, dispatcher: CrawlDispatcher) -> None:
    """
    Register the crawling tool with the FastMCP server.

    Tool calls are answered by the dispatcher directly on the protocol
    server: protocol faults it raises (unknown tool, invalid arguments,
    empty service response) reach the client as JSON-RPC errors, while
    crawling service failures come back as ``isError`` results.
    """

    async def list_tools(request: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=[CRAWL_TOOL]))

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(result)

    handler = ErrorHandlingMiddleware(LoggingMiddleware(call_tool))

    request_handlers = mcp._mcp_server.request_handlers
    request_handlers[types.ListToolsRequest] = list_tools
    request_handlers[types.CallToolRequest] = handler
    logger.debug(f"Registered tool handlers for {CRAWL_TOOL_NAME}")
