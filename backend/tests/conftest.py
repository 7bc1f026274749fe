"""Pytest fixtures for image search tests."""

import time
from unittest.mock import MagicMock

import pytest
import requests

from app.search.schemas import ImageResult, ImageSource, ProviderPage
from app.search.support import ProviderMonitor


class StubClient:
    """Stands in for a provider client; records calls and returns a canned page."""

    def __init__(self, source: ImageSource, page=None, delay: float = 0.0, error: Exception = None, configured=True):
        self.source = source
        self.page = page
        self.delay = delay
        self.error = error
        self.configured = configured
        self.calls = []

    def is_configured(self) -> bool:
        return self.configured

    def fetch(self, query, page, page_size):
        self.calls.append((query, page, page_size))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.page


def make_page(source: ImageSource, count: int, total: int = None, prefix: str = "") -> ProviderPage:
    images = [
        ImageResult(
            src=f"https://img.example/{source.value}/{prefix}{i}.jpg",
            name=f"{source.value} photo {prefix}{i}",
            location="Search: test",
            source=source,
        )
        for i in range(1, count + 1)
    ]
    total = count if total is None else total
    return ProviderPage(images=images, total=total, total_pages=1)


def mock_session(payload=None, status_error: int = None, get_error: Exception = None, json_error: Exception = None):
    """requests.Session double whose get() returns a response carrying `payload`."""
    response = MagicMock()
    response.json.return_value = payload
    if json_error is not None:
        response.json.side_effect = json_error
    if status_error is not None:
        err_response = MagicMock()
        err_response.status_code = status_error
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_error} Error", response=err_response
        )
    session = MagicMock()
    session.get.return_value = response
    if get_error is not None:
        session.get.side_effect = get_error
    return session


@pytest.fixture
def monitor():
    return ProviderMonitor()


@pytest.fixture
def unsplash_payload():
    """Two results: one fully described, one with no title, popularity or tags."""
    return {
        "total": 120,
        "total_pages": 15,
        "results": [
            {
                "id": "a1",
                "alt_description": "snowy mountain at dawn",
                "description": "Dawn in the Alps",
                "urls": {
                    "raw": "https://images.unsplash.com/a1?raw",
                    "full": "https://images.unsplash.com/a1?full",
                    "regular": "https://images.unsplash.com/a1?regular",
                    "small": "https://images.unsplash.com/a1?small",
                    "thumb": "https://images.unsplash.com/a1?thumb",
                },
                "user": {"name": "Ana Lopez"},
                "likes": 42,
                "downloads": 300,
                "views": 9000,
                "tags": [
                    {"type": "search", "title": "mountain"},
                    {"type": "search", "title": "snow"},
                    {"type": "search", "title": "dawn"},
                    {"type": "search", "title": "alps"},
                ],
            },
            {
                "id": "a2",
                "alt_description": None,
                "description": None,
                "urls": {"regular": "https://images.unsplash.com/a2?regular"},
                "user": {},
            },
        ],
    }


@pytest.fixture
def pexels_payload():
    return {
        "page": 1,
        "per_page": 8,
        "total_results": 17,
        "photos": [
            {
                "id": 101,
                "alt": "Lake surrounded by pine trees",
                "photographer": "Marco Rossi",
                "src": {
                    "original": "https://images.pexels.com/101/original.jpg",
                    "large2x": "https://images.pexels.com/101/large2x.jpg",
                    "large": "https://images.pexels.com/101/large.jpg",
                    "medium": "https://images.pexels.com/101/medium.jpg",
                },
            },
            {
                "id": 102,
                "alt": "",
                "photographer": "",
                "src": {"original": "https://images.pexels.com/102/original.jpg"},
            },
        ],
    }
