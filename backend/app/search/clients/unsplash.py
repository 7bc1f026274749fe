"""
Unsplash photo search client. Uses UNSPLASH_ACCESS_KEY.
"""

from typing import Any

from app.search.clients.base import ProviderClient, fallback_title
from app.search.errors import ProviderUnavailableError
from app.search.schemas import ImageMetadata, ImageResult, ImageSource, ProviderPage, page_count


class UnsplashClient(ProviderClient):
    source = ImageSource.UNSPLASH
    endpoint = "https://api.unsplash.com/search/photos"
    max_per_page = 30  # Unsplash max

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Accept-Version": "v1",
            "Authorization": f"Client-ID {self.api_key}",
        }

    def _params(self, query: str, page: int, page_size: int) -> dict[str, Any]:
        return {
            "query": query,
            "page": page,
            "per_page": min(page_size, self.max_per_page),
            "content_filter": "high",
        }

    def _parse(self, data: dict[str, Any], query: str, page_size: int) -> ProviderPage:
        items = data.get("results")
        if not isinstance(items, list):
            raise ProviderUnavailableError(self.source.value, "missing 'results' list")

        images = []
        for idx, item in enumerate(items, start=1):
            urls = item.get("urls") or {}
            src = urls.get("regular") or urls.get("full") or urls.get("raw")
            if not src:
                continue
            user = item.get("user") or {}
            tags = [t.get("title", "") for t in (item.get("tags") or []) if isinstance(t, dict)]
            images.append(
                ImageResult(
                    src=src,
                    thumbnail=urls.get("thumb") or urls.get("small"),
                    name=(item.get("alt_description") or "").strip()
                    or (item.get("description") or "").strip()
                    or fallback_title(query, idx),
                    location=f"Search: {query}",
                    source=self.source,
                    metadata=ImageMetadata(
                        photographer=user.get("name") or "Unknown",
                        likes=item.get("likes"),
                        downloads=item.get("downloads"),
                        views=item.get("views"),
                        tags=tags,
                    ),
                )
            )

        total = int(data.get("total") or 0)
        total_pages = data.get("total_pages")
        return ProviderPage(
            images=images,
            total=total,
            total_pages=max(1, int(total_pages)) if total_pages else page_count(total, page_size),
        )
