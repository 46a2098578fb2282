"""
Error logging middleware for MCP tool calls.
"""

import logging
import traceback

from mcp import types
from mcp.shared.exceptions import McpError

from .logging_middleware import CallToolHandler

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware:
    """
    Logs tool call failures. Errors are always re-raised unchanged so the
    protocol layer turns them into JSON-RPC error responses.
    """

    def __init__(self, app: CallToolHandler):
        self.app = app

    async def __call__(self, request: types.CallToolRequest) -> types.ServerResult:
        tool_name = request.params.name
        try:
            result = await self.app(request)

        except McpError as e:
            logger.warning(
                f"Protocol error in {tool_name} (code {e.error.code}): {e.error.message}"
            )
            raise

        except Exception as e:
            error_id = f"error_{hash(str(e)) % 10000:04d}"
            logger.error(
                f"Unexpected error [{error_id}] in {tool_name}: {e}\n"
                f"Traceback: {traceback.format_exc()}"
            )
            raise

        # Soft errors already carry a client-facing message
        if getattr(result.root, "isError", False):
            text = "".join(
                block.text for block in result.root.content if block.type == "text"
            )
            logger.warning(f"Tool error in {tool_name}: {text}")
        return result
