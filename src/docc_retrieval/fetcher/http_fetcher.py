"""HTTP fetcher built on httpx."""

import logging
import random

import httpx

from docc_retrieval.config import FetcherConfig
from docc_retrieval.fetcher.base import BaseFetcher, FetchResult

logger = logging.getLogger(__name__)


class HttpFetcher(BaseFetcher):
    """Plain HTTP fetcher with a rotating User-Agent."""

    def __init__(
        self,
        config: FetcherConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        """Initialize HTTP client."""
        self._client = httpx.AsyncClient(
            follow_redirects=True,
            timeout=self.config.timeout_seconds,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Clean up HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _user_agent(self) -> str:
        return random.choice(self.config.user_agents)

    async def fetch(self, url: str, accept: str | None = None) -> FetchResult:
        """Fetch a URL via HTTP GET."""
        if not self._client:
            raise RuntimeError("Fetcher not initialized. Use 'async with' context manager.")

        headers = {"User-Agent": self._user_agent()}
        if accept:
            headers["Accept"] = accept

        try:
            response = await self._client.get(url, headers=headers)
        except httpx.TimeoutException:
            logger.debug("Request timed out: %s", url)
            return FetchResult(
                url=url,
                final_url=url,
                status_code=0,
                error=f"timed out after {self.config.timeout_seconds:g}s",
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("Request failed: %s", url, exc_info=True)
            return FetchResult(url=url, final_url=url, status_code=0, error=str(e) or type(e).__name__)

        logger.debug("GET %s -> %d", url, response.status_code)
        return FetchResult(
            url=url,
            final_url=str(response.url),
            content=response.content,
            status_code=response.status_code,
        )
