"""Error types for the image search backend."""


class BadRequestError(ValueError):
    """Missing or invalid required request parameter; answered with HTTP 400."""


class ProviderUnavailableError(Exception):
    """A provider could not produce a usable page. Never leaves the provider client."""

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class DownloadError(Exception):
    """Remote image fetch failed."""


class DownloadTimeoutError(DownloadError):
    """Remote image fetch did not finish in time."""
