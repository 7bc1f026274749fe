"""Application configuration."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings from env."""

    unsplash_access_key: str = ""
    pexels_api_key: str = ""

    provider_timeout_seconds: float = 10.0
    download_timeout_seconds: float = 15.0

    default_page_size: int = 8  # the image grid shows 8 per page
    max_page_size: int = 50

    fallback_pool_size: int = 24
    fallback_image_base: str = "/placeholder.svg"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
