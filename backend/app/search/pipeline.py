"""
Search pipeline: raw query parameters → validated SearchRequest → aggregated SearchResponse.

Single entry point for the API: run_search(aggregator, query, page, per_page, source).
Provider problems never surface here; anything unexpected degrades to placeholders.
"""

import logging
from typing import Optional

from app.search.aggregator import SearchAggregator
from app.search.errors import BadRequestError
from app.search.schemas import ALL_SOURCES, MAX_PAGE_SIZE, ImageSource, SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 8


def _parse_int(raw: Optional[str], default: int, low: int, high: Optional[int] = None) -> int:
    """Parse a query-string int; fall back to `default` when absent or unparseable, then clamp."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        value = default
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


def _parse_source(raw: Optional[str]) -> str:
    value = (raw or ALL_SOURCES).strip().lower()
    if value == ALL_SOURCES or value in {s.value for s in ImageSource}:
        return value
    logger.warning("Unknown source filter %r, searching all providers", raw)
    return ALL_SOURCES


def parse_search_request(
    query: Optional[str],
    page: Optional[str] = None,
    per_page: Optional[str] = None,
    source: Optional[str] = None,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> SearchRequest:
    """
    Build a SearchRequest from raw query-string values.

    Raises:
        BadRequestError: query is missing or blank.
    """
    if query is None or not query.strip():
        raise BadRequestError("Query parameter is required")
    max_page_size = max(1, min(max_page_size, MAX_PAGE_SIZE))
    return SearchRequest(
        query=query.strip(),
        page=_parse_int(page, 1, 1),
        page_size=_parse_int(per_page, min(default_page_size, max_page_size), 1, max_page_size),
        source=_parse_source(source),
    )


def run_search(aggregator: SearchAggregator, request: SearchRequest) -> SearchResponse:
    """
    Run the aggregated search for a validated request.

    Always returns a well-formed SearchResponse: if aggregation itself fails, the
    placeholder page for the same parameters is returned instead.
    """
    try:
        return aggregator.search(request)
    except Exception as e:
        logger.exception("Search failed for %r, serving placeholders: %s", request.query, e)
        return aggregator.fallback(request)
