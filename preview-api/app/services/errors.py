class PreviewError(Exception):
    """Base class for errors raised inside the preview pipeline."""


class InvalidBaseURL(PreviewError, ValueError):
    """Raised when a URL cannot serve as an absolute base."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Not an absolute URL: {url!r}")
        self.url = url


class FetchError(PreviewError):
    """Raised when the remote page could not be retrieved."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class FetchTimeout(FetchError):
    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(url, f"Timed out after {timeout}s fetching {url}")
        self.timeout = timeout


class FetchBadStatus(FetchError):
    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(url, f"Failed to fetch {url}: {status_code}")
        self.status_code = status_code


class FetchNetworkError(FetchError):
    pass
