"""
Retry with exponential backoff for calls to the crawling service.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from ..config import Crawl4AIMCPSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """
    Bounded retry loop with exponential backoff.

    Every exception matching ``exceptions`` is retried the same way until
    ``max_attempts`` is reached; the exception from the last attempt is the
    one re-raised.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 1.0,
        exponential_base: float = 2.0,
    ):
        """
        Initialize retry policy.

        Args:
            max_attempts: Total number of attempts, including the first one
            initial_delay: Delay in seconds after the first failed attempt
            exponential_base: Multiplier applied to the delay after each failure
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.exponential_base = exponential_base

    @classmethod
    def from_settings(cls, settings: Crawl4AIMCPSettings) -> RetryPolicy:
        return cls(
            max_attempts=settings.retry_count,
            initial_delay=settings.retry_initial_delay,
            exponential_base=settings.retry_exponential_base,
        )

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        return self.initial_delay * (self.exponential_base ** (attempt - 1))

    async def run(
        self,
        func: Callable[[], Awaitable[T]],
        *,
        exceptions: tuple[type[BaseException], ...] = (Exception,),
        operation: str = "operation",
    ) -> T:
        """
        Await ``func()`` until it succeeds or the attempt budget is spent.

        Exceptions outside ``exceptions`` propagate immediately.
        """
        last_error: BaseException | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await func()
            except exceptions as e:
                last_error = e
                logger.warning(
                    f"{operation} attempt {attempt}/{self.max_attempts} failed: {e}"
                )

                if attempt < self.max_attempts:
                    delay = self.delay_for(attempt)
                    logger.info(f"Retrying {operation} in {delay * 1000:.0f}ms...")
                    await asyncio.sleep(delay)

        logger.error(f"{operation} failed after {self.max_attempts} attempts")
        if last_error is not None:
            raise last_error
        raise RuntimeError(f"Unexpected retry logic error in {operation}")

    def __repr__(self) -> str:
        return (
            f"RetryPolicy(max_attempts={self.max_attempts}, "
            f"initial_delay={self.initial_delay}, "
            f"exponential_base={self.exponential_base})"
        )
