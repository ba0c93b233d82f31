"""Errors raised while resolving and fetching documentation."""


class FetcherError(Exception):
    """Base class for documentation fetch failures."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class InvalidURLError(FetcherError):
    """The input could not be turned into a routable URL."""

    def __init__(self, url: str, reason: str | None = None):
        super().__init__(reason or f"Invalid URL: {url}", url=url)


class NotFoundError(FetcherError):
    """The documentation does not exist after every fallback was tried."""

    def __init__(self, url: str | None = None, message: str | None = None):
        super().__init__(
            message or (f"Documentation not found: {url}" if url else "Documentation not found"),
            url=url,
        )


class NetworkError(FetcherError):
    """Transport failure, timeout, or an unexpected HTTP status."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        super().__init__(f"Network error for {url}: {reason}", url=url)
        self.status_code = status_code


class DecodingError(FetcherError):
    """The payload did not match the DocC render-node schema."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Decoding error for {url}: {reason}", url=url)


class TableOfContentsPage(FetcherError):
    """The URL points at an aggregation page rather than an article.

    Not a failure as such: ``guidance`` tells the caller how to adjust input.
    """

    def __init__(self, url: str, guidance: str):
        super().__init__(guidance, url=url)
        self.guidance = guidance
