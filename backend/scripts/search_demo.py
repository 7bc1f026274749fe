"""
Run one aggregated image search against the live providers and print what came back.

Run from backend with:
  python scripts/search_demo.py
  python scripts/search_demo.py "mountain lake" --page 2 --per-page 8 --source pexels

Reads UNSPLASH_ACCESS_KEY and PEXELS_API_KEY from env (or .env). Missing keys are reported,
not fatal: the search then shows the placeholder results the API would serve.
"""

import argparse
import os
import sys
from textwrap import shorten

from dotenv import load_dotenv

load_dotenv()

# Add backend root so "app" is importable from scripts/ or from backend/
_backend_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _backend_root not in sys.path:
    sys.path.insert(0, _backend_root)

from app.config import Settings
from app.search import SearchAggregator, get_provider_monitor, parse_search_request, run_search


def _trunc(s: str, max_len: int = 72) -> str:
    return shorten(s, width=max_len, placeholder="…") if s else ""


def _section(title: str) -> None:
    print()
    print("=" * 80)
    print(f"  {title}")
    print("=" * 80)


def _sub(title: str) -> None:
    print(f"\n--- {title} ---")


def main() -> None:
    parser = argparse.ArgumentParser(description="Aggregated image search")
    parser.add_argument("query", nargs="?", default="mountain lake")
    parser.add_argument("--page", default="1")
    parser.add_argument("--per-page", default="8")
    parser.add_argument("--source", default="all", choices=["all", "unsplash", "pexels"])
    args = parser.parse_args()

    settings = Settings()
    aggregator = SearchAggregator.from_settings(settings)

    _section("Providers")
    for name, configured in aggregator.configured_sources().items():
        print(f"  {name:<9} {'configured' if configured else 'NOT configured (placeholders only)'}")

    request = parse_search_request(
        args.query,
        args.page,
        args.per_page,
        args.source,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    _section(f"Search: {request.query!r} page {request.page} ({request.page_size}/page, source={request.source})")
    response = run_search(aggregator, request)

    print(f"{'#':>3}  {'source':<9}  {'photographer':<20}  name")
    print("-" * 80)
    for i, img in enumerate(response.images, 1):
        print(f"{i:>3}  {img.source.value:<9}  {_trunc(img.metadata.photographer, 20):<20}  {_trunc(img.name, 40)}")

    _sub("Pagination")
    print(f"  total: {response.total}  total_pages: {response.total_pages}  current_page: {response.current_page}")

    _sub("Source breakdown")
    by_source: dict[str, int] = {}
    for img in response.images:
        by_source[img.source.value] = by_source.get(img.source.value, 0) + 1
    for name, count in sorted(by_source.items()):
        print(f"  {name}: {count} images")
    if response.images and all(img.location.startswith("Suggested:") for img in response.images):
        print("  (placeholder results: no provider returned data)")

    _sub("Provider calls")
    monitor = get_provider_monitor()
    for name in aggregator.configured_sources():
        stats = monitor.get_stats(name)
        print(
            f"  {name:<9} calls={stats.total_calls} ok={stats.successful_calls} "
            f"unavailable={stats.unavailable_calls} avg={stats.avg_duration_seconds:.2f}s"
        )
        if stats.last_failure:
            print(f"            last failure: {_trunc(stats.last_failure, 60)}")

    _sub("Image URLs (raw)")
    for img in response.images:
        print(f"  {img.src}")
    print()


if __name__ == "__main__":
    main()
