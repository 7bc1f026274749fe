"""
Pexels photo search client. Uses PEXELS_API_KEY.
"""

from typing import Any

from app.search.clients.base import ProviderClient, fallback_title
from app.search.errors import ProviderUnavailableError
from app.search.schemas import ImageMetadata, ImageResult, ImageSource, ProviderPage, page_count


class PexelsClient(ProviderClient):
    source = ImageSource.PEXELS
    endpoint = "https://api.pexels.com/v1/search"
    max_per_page = 80  # Pexels max

    def _headers(self) -> dict[str, str]:
        return {"Authorization": self.api_key}

    def _params(self, query: str, page: int, page_size: int) -> dict[str, Any]:
        return {
            "query": query,
            "page": page,
            "per_page": min(page_size, self.max_per_page),
        }

    def _parse(self, data: dict[str, Any], query: str, page_size: int) -> ProviderPage:
        photos = data.get("photos")
        if not isinstance(photos, list):
            raise ProviderUnavailableError(self.source.value, "missing 'photos' list")

        images = []
        for idx, photo in enumerate(photos, start=1):
            src_urls = photo.get("src") or {}
            src = src_urls.get("large2x") or src_urls.get("large") or src_urls.get("original")
            if not src:
                continue
            # Pexels exposes no popularity counts or tags
            images.append(
                ImageResult(
                    src=src,
                    thumbnail=src_urls.get("medium") or src_urls.get("small"),
                    name=(photo.get("alt") or "").strip() or fallback_title(query, idx),
                    location=f"Search: {query}",
                    source=self.source,
                    metadata=ImageMetadata(photographer=photo.get("photographer") or "Unknown"),
                )
            )

        total = int(data.get("total_results") or 0)
        return ProviderPage(images=images, total=total, total_pages=page_count(total, page_size))
