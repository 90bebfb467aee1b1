"""Exception types for pybaselinescan."""

from __future__ import annotations


class BaselineScanError(Exception):
    """Base exception for expected application errors."""


class InvalidUrlError(BaselineScanError):
    """Raised when a scan target is not an absolute http(s) URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid URL format: {url!r}")


class NetworkError(BaselineScanError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to connect to {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(BaselineScanError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(BaselineScanError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(BaselineScanError):
    """Raised when a response body is invalid or unexpectedly empty."""

    def __init__(self, url: str, *, detail: str = "empty content") -> None:
        super().__init__(f"Received {detail} from {url}")


class ContentTooLargeError(BaselineScanError):
    """Raised when a response body exceeds the configured size cap."""

    def __init__(self, url: str, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Response from {url} is {size} bytes (limit {limit})")


class SupportDataError(BaselineScanError):
    """Raised when web-features support data cannot be loaded."""

    def __init__(self, source: str, *, cause: str | None = None) -> None:
        detail = f"Unable to load support data from {source}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)
