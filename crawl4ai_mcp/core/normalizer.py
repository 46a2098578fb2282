"""
Normalization of Crawl4AI responses into markdown text.

The crawling service has returned several response layouts over time:
``{"results": [...]}``, a bare list of results, or a single result object.
Individual results carry markdown under ``markdown_v2.markdown_with_citations``
(older servers), ``markdown`` as a string, or ``markdown`` as an object with
``markdown_with_citations`` / ``raw_markdown`` (newer servers).
"""

import json
import logging
from collections.abc import Iterable
from typing import Any

logger = logging.getLogger(__name__)

NO_MARKDOWN_SENTINEL = "Error: No markdown content available for this URL"
RESULT_SEPARATOR = "\n\n---\n\n"

_PREVIEW_LENGTH = 200


def _non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _preview(item: Any) -> str:
    try:
        dumped = json.dumps(item, default=str)
    except (TypeError, ValueError):
        dumped = repr(item)
    return dumped[:_PREVIEW_LENGTH] + "..."


def extract_markdown(result: Any) -> str:
    """
    Extract markdown text from a single crawl result.

    Never raises: unrecognized shapes yield ``NO_MARKDOWN_SENTINEL``.
    """
    if isinstance(result, dict):
        markdown_v2 = result.get("markdown_v2")
        if isinstance(markdown_v2, dict):
            text = _non_empty_str(markdown_v2.get("markdown_with_citations"))
            if text is not None:
                return text

        markdown = result.get("markdown")
        if isinstance(markdown, dict):
            markdown = markdown.get("markdown_with_citations") or markdown.get(
                "raw_markdown"
            )
        text = _non_empty_str(markdown)
        if text is not None:
            return text

    elif isinstance(result, str):
        return result

    logger.warning(f"Cannot extract markdown from result: {_preview(result)}")
    return NO_MARKDOWN_SENTINEL


def resolve_results(body: Any) -> list[Any]:
    """Return the list of result items contained in a response body."""
    if isinstance(body, dict) and isinstance(body.get("results"), list):
        return body["results"]
    if isinstance(body, list):
        return body
    # Treat the whole response as a single result
    return [body]


def join_markdown(texts: Iterable[str]) -> str:
    return RESULT_SEPARATOR.join(texts)


def normalize_response(body: Any) -> str:
    """Resolve, extract and join every result in ``body``."""
    return join_markdown(extract_markdown(item) for item in resolve_results(body))
