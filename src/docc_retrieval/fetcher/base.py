"""Base class for HTTP fetchers."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from docc_retrieval.config import FetcherConfig


class FetchResult(BaseModel):
    """Result of a single GET request."""

    url: str
    final_url: str  # After redirects
    content: bytes = b""
    status_code: int
    error: str | None = None

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300 and not self.error

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class BaseFetcher(ABC):
    """Abstract base class for fetchers."""

    def __init__(self, config: FetcherConfig):
        self.config = config

    @abstractmethod
    async def fetch(self, url: str, accept: str | None = None) -> FetchResult:
        """Issue a GET request. Transport failures are reported, not raised."""
        pass

    @abstractmethod
    async def __aenter__(self):
        """Async context manager entry."""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        pass
