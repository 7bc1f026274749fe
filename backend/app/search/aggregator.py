"""
Search aggregator: query every active image provider in parallel and merge into one page.
"""

import concurrent.futures
import logging
import random
from typing import Mapping, Optional

from app.config import Settings
from app.search.clients import PexelsClient, ProviderClient, UnsplashClient
from app.search.fallback import DEFAULT_IMAGE_BASE, DEFAULT_POOL_SIZE, generate_fallback
from app.search.schemas import (
    MAX_PAGE_SIZE,
    ImageResult,
    ImageSource,
    ProviderPage,
    SearchRequest,
    SearchResponse,
    page_count,
)

logger = logging.getLogger(__name__)


class SearchAggregator:
    def __init__(
        self,
        clients: Mapping[ImageSource, ProviderClient],
        *,
        fallback_pool_size: int = DEFAULT_POOL_SIZE,
        fallback_image_base: str = DEFAULT_IMAGE_BASE,
        rng: Optional[random.Random] = None,
    ):
        self.clients = dict(clients)
        self.fallback_pool_size = fallback_pool_size
        self.fallback_image_base = fallback_image_base
        self._rng = rng

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchAggregator":
        timeout = settings.provider_timeout_seconds
        return cls(
            {
                ImageSource.UNSPLASH: UnsplashClient(settings.unsplash_access_key, timeout=timeout),
                ImageSource.PEXELS: PexelsClient(settings.pexels_api_key, timeout=timeout),
            },
            fallback_pool_size=settings.fallback_pool_size,
            fallback_image_base=settings.fallback_image_base,
        )

    def configured_sources(self) -> dict[str, bool]:
        return {source.value: client.is_configured() for source, client in self.clients.items()}

    def page_size_limit(self, request: SearchRequest) -> int:
        """Largest page every active, configured provider can serve as one page of its own."""
        caps = [
            getattr(self.clients[s], "max_per_page", MAX_PAGE_SIZE)
            for s in request.active_sources()
            if s in self.clients and self.clients[s].is_configured()
        ]
        return min([MAX_PAGE_SIZE, *caps])

    def fit_request(self, request: SearchRequest) -> SearchRequest:
        """Clamp page_size so caller page N maps exactly onto provider page N."""
        limit = self.page_size_limit(request)
        if request.page_size <= limit:
            return request
        logger.info("page_size %d above provider limit, using %d", request.page_size, limit)
        return request.model_copy(update={"page_size": limit})

    def fallback(self, request: SearchRequest) -> SearchResponse:
        """Placeholder page for the request; used when providers yield nothing."""
        generated = generate_fallback(
            request.query,
            request.page,
            request.page_size,
            request.source,
            pool_size=self.fallback_pool_size,
            image_base=self.fallback_image_base,
            rng=self._rng,
        )
        return SearchResponse(
            images=generated.images[: request.page_size],
            total=generated.total,
            total_pages=page_count(generated.total, request.page_size),
            current_page=request.page,
        )

    def _fetch_all(self, request: SearchRequest) -> list[tuple[ImageSource, Optional[ProviderPage]]]:
        sources = [s for s in request.active_sources() if s in self.clients]
        if not sources:
            return []

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(sources)) as executor:
            futures = [
                (
                    source,
                    executor.submit(
                        self.clients[source].fetch, request.query, request.page, request.page_size
                    ),
                )
                for source in sources
            ]
            # Collect in provider order, not completion order, so merging is deterministic
            results = []
            for source, future in futures:
                try:
                    results.append((source, future.result()))
                except Exception as e:
                    logger.exception("Error executing %s search for %r: %s", source.value, request.query, e)
                    results.append((source, None))
        return results

    def search(self, request: SearchRequest) -> SearchResponse:
        """Fan out to the active providers, merge in provider order, fall back if nothing came back."""
        request = self.fit_request(request)
        images: list[ImageResult] = []
        total = 0
        contributors = []
        for source, page in self._fetch_all(request):
            if page is None or not page.images:
                continue
            images.extend(page.images)
            total += page.total
            contributors.append(source.value)

        if not images:
            logger.info("No provider results for %r (source=%s), using placeholders", request.query, request.source)
            return self.fallback(request)

        if len(images) > request.page_size:
            images = images[: request.page_size]

        logger.info(
            "Merged %d images for %r from %s (total %d)",
            len(images),
            request.query,
            ", ".join(contributors),
            total,
        )
        return SearchResponse(
            images=images,
            total=total,
            total_pages=page_count(total, request.page_size),
            current_page=request.page,
        )
