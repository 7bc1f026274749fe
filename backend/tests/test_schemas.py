"""Tests for image search schemas."""

import pytest
from pydantic import ValidationError

from app.search.schemas import (
    ImageMetadata,
    ImageResult,
    ImageSource,
    ProviderPage,
    SearchRequest,
    SearchResponse,
    page_count,
)


class TestPageCount:
    """page_count(total, page_size)."""

    def test_exact_multiple(self):
        assert page_count(24, 8) == 3

    def test_rounds_up(self):
        assert page_count(25, 8) == 4

    def test_zero_total_is_one_page(self):
        assert page_count(0, 8) == 1


class TestImageMetadata:
    """Attribution and popularity metadata."""

    def test_defaults(self):
        meta = ImageMetadata()
        assert meta.photographer == "Unknown"
        assert meta.likes == 0
        assert meta.downloads == 0
        assert meta.views == 0
        assert meta.tags == []

    def test_none_counts_become_zero(self):
        meta = ImageMetadata(likes=None, downloads=None, views=None)
        assert (meta.likes, meta.downloads, meta.views) == (0, 0, 0)

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            ImageMetadata(likes=-1)

    def test_tags_capped_at_three(self):
        meta = ImageMetadata(tags=["a", "b", "c", "d", "e"])
        assert meta.tags == ["a", "b", "c"]

    def test_empty_tags_dropped_before_cap(self):
        meta = ImageMetadata(tags=["", "a", "", "b", "c", "d"])
        assert meta.tags == ["a", "b", "c"]


class TestImageResult:
    """Normalized image result."""

    def test_thumbnail_falls_back_to_src(self):
        img = ImageResult(src="https://x/1.jpg", name="one", source=ImageSource.PEXELS)
        assert img.thumbnail == "https://x/1.jpg"

    def test_empty_thumbnail_falls_back_to_src(self):
        img = ImageResult(src="https://x/1.jpg", thumbnail="", name="one", source="pexels")
        assert img.thumbnail == "https://x/1.jpg"

    def test_src_required_non_empty(self):
        with pytest.raises(ValidationError):
            ImageResult(src="", name="one", source="pexels")

    def test_name_required_non_empty(self):
        with pytest.raises(ValidationError):
            ImageResult(src="https://x/1.jpg", name="", source="pexels")

    def test_source_is_closed_set(self):
        with pytest.raises(ValidationError):
            ImageResult(src="https://x/1.jpg", name="one", source="flickr")

    def test_json_shape(self):
        img = ImageResult(src="https://x/1.jpg", name="one", location="Search: x", source="unsplash")
        data = img.model_dump(mode="json")
        assert data["source"] == "unsplash"
        assert set(data) == {"src", "thumbnail", "name", "location", "source", "metadata"}
        assert data["metadata"]["tags"] == []


class TestSearchRequest:
    """Validated search parameters."""

    def test_defaults(self):
        req = SearchRequest(query="cats")
        assert req.page == 1
        assert req.page_size == 8
        assert req.source == "all"

    def test_query_stripped(self):
        assert SearchRequest(query="  cats ").query == "cats"

    def test_blank_query_rejected(self):
        with pytest.raises(ValidationError):
            SearchRequest(query="   ")

    def test_page_must_be_positive(self):
        with pytest.raises(ValidationError):
            SearchRequest(query="cats", page=0)

    def test_page_size_bounded(self):
        with pytest.raises(ValidationError):
            SearchRequest(query="cats", page_size=51)

    def test_unknown_source_rejected(self):
        with pytest.raises(ValidationError):
            SearchRequest(query="cats", source="flickr")

    def test_active_sources_all_in_merge_order(self):
        assert SearchRequest(query="cats").active_sources() == [ImageSource.UNSPLASH, ImageSource.PEXELS]

    def test_active_sources_single(self):
        assert SearchRequest(query="cats", source="PEXELS").active_sources() == [ImageSource.PEXELS]


class TestResponses:
    """ProviderPage and SearchResponse."""

    def test_provider_page_defaults(self):
        page = ProviderPage()
        assert page.images == []
        assert page.total == 0
        assert page.total_pages == 1

    def test_search_response_wire_names(self):
        resp = SearchResponse(images=[], total=0, total_pages=1, current_page=2)
        assert resp.model_dump() == {"images": [], "total": 0, "total_pages": 1, "current_page": 2}

    def test_current_page_required(self):
        with pytest.raises(ValidationError):
            SearchResponse(images=[], total=0, total_pages=1)
