"""
Logging middleware for MCP tool calls.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from mcp import types

logger = logging.getLogger(__name__)

CallToolHandler = Callable[[types.CallToolRequest], Awaitable[types.ServerResult]]


class LoggingMiddleware:
    """
    Middleware to log tool calls with timing information.
    """

    def __init__(self, app: CallToolHandler):
        self.app = app

    async def __call__(self, request: types.CallToolRequest) -> types.ServerResult:
        start_time = time.time()
        tool_name = request.params.name
        arguments = request.params.arguments or {}

        logger.info(f"Incoming tool call {tool_name} ({len(arguments)} argument(s))")
        logger.debug(f"Arguments for {tool_name}: {arguments}")

        try:
            result = await self.app(request)
        except Exception as e:
            processing_time = time.time() - start_time
            logger.error(
                f"Failed tool call {tool_name} after {processing_time:.3f}s: {e!s}"
            )
            raise

        processing_time = time.time() - start_time
        outcome = "with error result " if getattr(result.root, "isError", False) else ""
        logger.info(f"Completed tool call {tool_name} {outcome}in {processing_time:.3f}s")
        return result
