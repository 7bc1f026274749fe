"""Image search: provider clients, aggregation and placeholder fallback."""

from .aggregator import SearchAggregator
from .clients import PexelsClient, ProviderClient, UnsplashClient
from .errors import BadRequestError, DownloadError, DownloadTimeoutError, ProviderUnavailableError
from .fallback import generate_fallback
from .pipeline import parse_search_request, run_search
from .schemas import (
    ImageMetadata,
    ImageResult,
    ImageSource,
    ProviderPage,
    SearchRequest,
    SearchResponse,
)
from .support import ProviderMonitor, get_provider_monitor

__all__ = [
    "SearchAggregator",
    "ProviderClient",
    "UnsplashClient",
    "PexelsClient",
    "generate_fallback",
    "parse_search_request",
    "run_search",
    "BadRequestError",
    "DownloadError",
    "DownloadTimeoutError",
    "ProviderUnavailableError",
    "ImageMetadata",
    "ImageResult",
    "ImageSource",
    "ProviderPage",
    "SearchRequest",
    "SearchResponse",
    "ProviderMonitor",
    "get_provider_monitor",
]
