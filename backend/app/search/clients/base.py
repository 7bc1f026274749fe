"""
Common provider client: credential check, one bounded HTTP call, failure absorption.

Subclasses describe the provider's endpoint and how to turn its JSON into a ProviderPage.
"""

import concurrent.futures
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests

from app.search.errors import ProviderUnavailableError
from app.search.schemas import ImageSource, ProviderPage
from app.search.support import ProviderMonitor, get_provider_monitor

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

# Values people leave in .env files instead of a real key
PLACEHOLDER_KEYS = frozenset(
    {
        "demo",
        "undefined",
        "null",
        "none",
        "changeme",
        "your_api_key",
        "your_unsplash_access_key",
        "your_pexels_api_key",
    }
)


def is_usable_key(api_key: Optional[str]) -> bool:
    if not api_key or not api_key.strip():
        return False
    return api_key.strip().lower() not in PLACEHOLDER_KEYS


def fallback_title(query: str, position: int) -> str:
    return f"{query} View {position}"


class ProviderClient(ABC):
    """One image provider. `fetch` returns None when the provider is unavailable."""

    source: ImageSource
    endpoint: str
    max_per_page: int

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        monitor: Optional[ProviderMonitor] = None,
    ):
        self.api_key = api_key.strip() if api_key else ""
        self.timeout = timeout
        self._session = session
        self.monitor = monitor or get_provider_monitor()

    @property
    def session(self) -> requests.Session:
        # Reuse one session per client for connection pooling
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def is_configured(self) -> bool:
        return is_usable_key(self.api_key)

    @abstractmethod
    def _headers(self) -> dict[str, str]:
        ...

    @abstractmethod
    def _params(self, query: str, page: int, page_size: int) -> dict[str, Any]:
        ...

    @abstractmethod
    def _parse(self, data: dict[str, Any], query: str, page_size: int) -> ProviderPage:
        """Map the provider payload to a ProviderPage; raise ProviderUnavailableError if it does not fit."""

    def _get_json(self, query: str, page: int, page_size: int, holder: dict) -> Any:
        response = self.session.get(
            self.endpoint,
            params=self._params(query, page, page_size),
            headers=self._headers(),
            timeout=self.timeout,
            stream=True,
        )
        holder["response"] = response
        try:
            response.raise_for_status()
            return response.json()
        finally:
            response.close()

    def _get_json_within_deadline(self, query: str, page: int, page_size: int) -> Any:
        """
        One provider request bounded by `self.timeout` end to end.

        requests' own timeout only bounds connect and the gap between reads, so a
        body trickled byte by byte would otherwise hold the call open indefinitely.
        """
        holder: dict[str, Any] = {}
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"{self.source.value}-fetch"
        )
        try:
            future = executor.submit(self._get_json, query, page, page_size, holder)
            try:
                return future.result(timeout=self.timeout)
            except concurrent.futures.TimeoutError:
                future.cancel()
                response = holder.get("response")
                if response is not None:
                    # Unblocks the worker's pending read
                    response.close()
                raise requests.exceptions.Timeout(f"no complete response within {self.timeout}s")
        finally:
            executor.shutdown(wait=False)

    def fetch(self, query: str, page: int, page_size: int) -> Optional[ProviderPage]:
        name = self.source.value
        if not self.is_configured():
            logger.info("%s: no usable API key configured, skipping", name)
            return None

        metric = self.monitor.start_call(query, name)
        try:
            data = self._get_json_within_deadline(query, page, page_size)
            if not isinstance(data, dict):
                raise ProviderUnavailableError(name, "payload is not a JSON object")
            result = self._parse(data, query, page_size)

        except requests.exceptions.Timeout as e:
            return self._unavailable(metric, f"timeout: {e}", query)
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            return self._unavailable(metric, f"http {status}: {e}", query)
        except requests.exceptions.JSONDecodeError as e:
            return self._unavailable(metric, f"payload: invalid JSON: {e}", query)
        except requests.exceptions.RequestException as e:
            return self._unavailable(metric, f"network: {e}", query)
        except ProviderUnavailableError as e:
            return self._unavailable(metric, f"payload: {e.reason}", query)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            # pydantic ValidationError is a ValueError
            return self._unavailable(metric, f"payload: {e}", query)

        self.monitor.record_success(metric, len(result.images))
        logger.info(
            "%s: %d images for %r (page %d, total %d)",
            name,
            len(result.images),
            query,
            page,
            result.total,
        )
        return result

    def _unavailable(self, metric, reason: str, query: str) -> None:
        self.monitor.record_unavailable(metric, reason)
        logger.warning("%s search failed for query %r: %s", self.source.value, query, reason)
        return None
