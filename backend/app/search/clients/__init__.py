"""Image provider clients: Unsplash and Pexels."""

from .base import ProviderClient, is_usable_key
from .pexels import PexelsClient
from .unsplash import UnsplashClient

__all__ = ["ProviderClient", "PexelsClient", "UnsplashClient", "is_usable_key"]
