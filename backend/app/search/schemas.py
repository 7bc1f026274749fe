"""
Image search: Pydantic schemas shared by the provider clients, the aggregator and the API.
"""

import math
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

MAX_TAGS = 3
MAX_PAGE_SIZE = 50


class ImageSource(str, Enum):
    """Known image providers, in the order their results are merged."""

    UNSPLASH = "unsplash"
    PEXELS = "pexels"


ALL_SOURCES = "all"


def page_count(total: int, page_size: int) -> int:
    """Pages needed for `total` items; never less than 1."""
    if page_size < 1:
        return 1
    return max(1, math.ceil(total / page_size))


# ----- Results -----


class ImageMetadata(BaseModel):
    """Popularity and attribution info; zero/unknown when a provider does not expose a field."""

    photographer: str = "Unknown"
    likes: int = Field(default=0, ge=0)
    downloads: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list, description=f"At most {MAX_TAGS} tags")

    @field_validator("likes", "downloads", "views", mode="before")
    @classmethod
    def _unknown_count_is_zero(cls, value):
        if value is None:
            return 0
        return value

    @field_validator("tags")
    @classmethod
    def _cap_tags(cls, value: list[str]) -> list[str]:
        return [t for t in value if t][:MAX_TAGS]


class ImageResult(BaseModel):
    """Normalized unit returned to callers, whatever provider it came from."""

    src: str = Field(..., min_length=1, description="Full-resolution image URI")
    thumbnail: str | None = Field(default=None, description="Smaller preview; falls back to src")
    name: str = Field(..., min_length=1)
    location: str = ""
    source: ImageSource
    metadata: ImageMetadata = Field(default_factory=ImageMetadata)

    @model_validator(mode="after")
    def _thumbnail_defaults_to_src(self):
        if not self.thumbnail:
            self.thumbnail = self.src
        return self


class ProviderPage(BaseModel):
    """One provider's normalized answer for a single page."""

    images: list[ImageResult] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    total_pages: int = Field(default=1, ge=1)


# ----- Request / response -----


class SearchRequest(BaseModel):
    """Validated search parameters."""

    query: str = Field(..., min_length=1)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=8, ge=1, le=MAX_PAGE_SIZE)
    source: str = ALL_SOURCES

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("query must not be blank")
        return value

    @field_validator("source")
    @classmethod
    def _known_source(cls, value: str) -> str:
        value = (value or ALL_SOURCES).strip().lower()
        if value != ALL_SOURCES and value not in {s.value for s in ImageSource}:
            raise ValueError(f"unknown source: {value}")
        return value

    def active_sources(self) -> list[ImageSource]:
        """Providers to query, in merge order."""
        if self.source == ALL_SOURCES:
            return list(ImageSource)
        return [ImageSource(self.source)]


class SearchResponse(BaseModel):
    """Paginated, merged result set sent to the client."""

    images: list[ImageResult] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    total_pages: int = Field(default=1, ge=1)
    current_page: int = Field(..., ge=1)


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
