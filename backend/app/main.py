"""
Image Search API: multi-provider photo search (Unsplash + Pexels) with placeholder fallback,
plus a download proxy for saving a selected image.

Run from backend/ with:
    uvicorn app.main:app --reload
"""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.download import fetch_image, validate_image_url
from app.search import (
    BadRequestError,
    DownloadError,
    DownloadTimeoutError,
    ImageSource,
    SearchAggregator,
    SearchResponse,
    get_provider_monitor,
    parse_search_request,
    run_search,
)
from app.search.schemas import ErrorResponse

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Image Search", version="0.1.0")

_aggregator: Optional[SearchAggregator] = None


def get_aggregator() -> SearchAggregator:
    global _aggregator
    if _aggregator is None:
        _aggregator = SearchAggregator.from_settings(get_settings())
    return _aggregator


@app.exception_handler(BadRequestError)
def bad_request_handler(request: Request, exc: BadRequestError):
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True))


@app.exception_handler(DownloadTimeoutError)
def download_timeout_handler(request: Request, exc: DownloadTimeoutError):
    return JSONResponse(
        status_code=408,
        content=ErrorResponse(error="Download timeout - image took too long to fetch").model_dump(exclude_none=True),
    )


@app.exception_handler(DownloadError)
def download_error_handler(request: Request, exc: DownloadError):
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Failed to download image", details=str(exc) or "Unknown error").model_dump(),
    )


@app.get("/health")
def health(aggregator: SearchAggregator = Depends(get_aggregator)):
    return {"status": "ok", "providers": aggregator.configured_sources()}


@app.get("/stats")
def stats():
    """Per-provider call statistics since startup."""
    monitor = get_provider_monitor()
    return {source.value: asdict(monitor.get_stats(source.value)) for source in ImageSource}


@app.get("/search", response_model=SearchResponse, responses={400: {"model": ErrorResponse}})
@app.get("/api/search-images", response_model=SearchResponse, include_in_schema=False)
def search_images(
    query: Optional[str] = None,
    page: Optional[str] = None,
    per_page: Optional[str] = None,
    source: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    aggregator: SearchAggregator = Depends(get_aggregator),
):
    """
    Search Unsplash and Pexels in parallel and return one merged page.

    page/per_page fall back to defaults when missing or not numbers; source is
    "all", "unsplash" or "pexels". Without usable provider keys, or when no provider
    returns anything, the page is filled with placeholder results.
    """
    request = parse_search_request(
        query,
        page,
        per_page,
        source,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    return run_search(aggregator, request)


@app.get("/download", responses={400: {"model": ErrorResponse}, 408: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
@app.get("/api/download-image", include_in_schema=False)
def download_image(
    url: Optional[str] = None,
    filename: Optional[str] = None,
    settings: Settings = Depends(get_settings),
):
    """Proxy the image at `url` back as an attachment named `filename`."""
    image = fetch_image(validate_image_url(url), filename, timeout=settings.download_timeout_seconds)
    return Response(
        content=image.content,
        media_type=image.content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{image.filename}"',
            "Cache-Control": "public, max-age=3600",
        },
    )
