"""
Middleware around MCP tool calls with error handling and logging.
"""

from .error_middleware import ErrorHandlingMiddleware
from .logging_middleware import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]
