"""
Image download proxy: fetch remote image bytes so the browser can save them as an attachment.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import requests

from app.search.errors import BadRequestError, DownloadError, DownloadTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "image.jpg"
DEFAULT_CONTENT_TYPE = "image/jpeg"
DOWNLOAD_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; ImageDownloader/1.0)",
    "Accept": "image/*",
}


@dataclass
class DownloadedImage:
    content: bytes
    content_type: str
    filename: str


def safe_filename(filename: Optional[str]) -> str:
    """Strip characters that would break a Content-Disposition header or escape a directory."""
    cleaned = re.sub(r'["\\/\r\n]', "", (filename or "").strip())
    return cleaned or DEFAULT_FILENAME


def validate_image_url(url: Optional[str]) -> str:
    if not url or not url.strip():
        raise BadRequestError("Image URL is required")
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise BadRequestError("Image URL must be an absolute http(s) URL")
    return url


def fetch_image(url: str, filename: Optional[str] = None, timeout: float = 15.0) -> DownloadedImage:
    """
    Download the image at `url`.

    Raises:
        DownloadTimeoutError: the remote host did not answer within `timeout`.
        DownloadError: any other network failure or non-2xx status.
    """
    logger.info("Downloading image from %s", url)
    try:
        response = requests.get(url, headers=DOWNLOAD_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.warning("Image download timed out for %s: %s", url, e)
        raise DownloadTimeoutError(str(e)) from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.warning("Image download failed for %s: HTTP %s", url, status)
        raise DownloadError(f"Failed to fetch image: {status}") from e
    except requests.exceptions.RequestException as e:
        logger.warning("Image download failed for %s: %s", url, e)
        raise DownloadError(str(e)) from e

    content = response.content
    logger.info("Image downloaded successfully, size: %d", len(content))
    return DownloadedImage(
        content=content,
        content_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
        filename=safe_filename(filename),
    )
