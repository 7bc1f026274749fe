"""
Placeholder results used when no provider returns anything.

The pool is derived only from the query, so names, locators and sources repeat across
calls. Popularity counts are drawn fresh on every call.
"""

import random
from typing import Optional
from urllib.parse import urlencode

from app.search.schemas import (
    ALL_SOURCES,
    ImageMetadata,
    ImageResult,
    ImageSource,
    ProviderPage,
    page_count,
)

DEFAULT_POOL_SIZE = 24
DEFAULT_IMAGE_BASE = "/placeholder.svg"

ADJECTIVES = ["Serene", "Vibrant", "Misty", "Golden", "Majestic", "Tranquil", "Dramatic", "Peaceful"]
NOUNS = ["Vista", "Landscape", "Panorama", "Scene", "View", "Horizon"]
PHOTOGRAPHERS = ["Alex Rivera", "Sam Chen", "Jordan Lee", "Taylor Morgan", "Casey Kim"]


def _placeholder_url(image_base: str, text: str, height: int, width: int) -> str:
    return f"{image_base}?{urlencode({'height': height, 'width': width, 'query': text})}"


def _source_for(index: int, source: str) -> ImageSource:
    if source == ALL_SOURCES:
        return ImageSource.UNSPLASH if index % 2 == 0 else ImageSource.PEXELS
    return ImageSource(source)


def _candidate(query: str, index: int, source: str, image_base: str, rng: random.Random) -> ImageResult:
    adjective = ADJECTIVES[index % len(ADJECTIVES)]
    noun = NOUNS[index % len(NOUNS)]
    name = f"{adjective} {query} {noun}"
    return ImageResult(
        src=_placeholder_url(image_base, name, 600, 800),
        thumbnail=_placeholder_url(image_base, name, 200, 300),
        name=name,
        location=f"Suggested: {query}",
        source=_source_for(index, source),
        metadata=ImageMetadata(
            photographer=PHOTOGRAPHERS[index % len(PHOTOGRAPHERS)],
            likes=rng.randint(50, 1000),
            downloads=rng.randint(10, 500),
            views=rng.randint(1000, 50000),
            tags=[query.lower(), adjective.lower(), noun.lower()],
        ),
    )


def generate_fallback(
    query: str,
    page: int,
    page_size: int,
    source: str = ALL_SOURCES,
    *,
    pool_size: int = DEFAULT_POOL_SIZE,
    image_base: str = DEFAULT_IMAGE_BASE,
    rng: Optional[random.Random] = None,
) -> ProviderPage:
    """
    Build one page of the placeholder pool for `query`.

    Args:
        query: Search text the placeholders are named after.
        page: 1-based page; pages past the end of the pool are empty.
        page_size: Items per page.
        source: "all" alternates unsplash/pexels by index; a provider name labels every item.
        pool_size: Number of candidates in the pool (total).
        image_base: Path or URL of the placeholder image renderer.
        rng: Random source for popularity counts.

    Returns:
        ProviderPage with the requested slice, total=pool_size.
    """
    query = query.strip()
    rng = rng or random.Random()
    page = max(1, page)
    page_size = max(1, page_size)

    start = (page - 1) * page_size
    end = min(page * page_size, pool_size)
    images = [_candidate(query, i, source, image_base, rng) for i in range(start, end)]

    return ProviderPage(
        images=images,
        total=pool_size,
        total_pages=page_count(pool_size, page_size),
    )
