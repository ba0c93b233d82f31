"""DocC JSON fetcher that routes URLs through the pattern registry."""

import logging
from urllib.parse import ParseResult, urlparse

from pydantic import BaseModel, ValidationError

from docc_retrieval.config import FetcherConfig, GitHubConfig
from docc_retrieval.fetcher.base import BaseFetcher, FetchResult
from docc_retrieval.fetcher.errors import (
    DecodingError,
    InvalidURLError,
    NetworkError,
    NotFoundError,
    TableOfContentsPage,
)
from docc_retrieval.fetcher.github import GitHubRepoResolver
from docc_retrieval.fetcher.http_fetcher import HttpFetcher
from docc_retrieval.models import DocCRenderNode
from docc_retrieval.patterns import GenericDocCHandler, PatternRegistry, ResponseType, URLPatternHandler
from docc_retrieval.patterns.handlers import is_deferred, split_deferred
from docc_retrieval.utils.url_utils import origin, to_absolute_url, trimmed_path

logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/json"

TOC_GUIDANCE = (
    "This is a Table of Contents page. Use a specific article path instead. "
    "Example: /design/human-interface-guidelines/color"
)


class ResolvedPath(BaseModel):
    """Routing decision for a URL, computed without network access."""

    url: str
    handler: str
    priority: int
    response_type: ResponseType
    json_path: str
    request_url: str | None = None  # None when further resolution is needed


class DocCJSONFetcher:
    """Fetch and decode DocC JSON for documentation URLs.

    Use as an async context manager so the underlying HTTP client is opened
    and closed around a batch of requests.
    """

    def __init__(
        self,
        config: FetcherConfig | None = None,
        registry: PatternRegistry | None = None,
        github: GitHubConfig | None = None,
        fetcher: BaseFetcher | None = None,
    ):
        self.config = config or FetcherConfig()
        self.github_config = github or GitHubConfig()
        if registry is None:
            registry = PatternRegistry.default(self.github_config.pages_suffix)
        self.registry = registry
        self.fetcher = fetcher or HttpFetcher(self.config)
        self._github = GitHubRepoResolver(self, self.github_config)

    async def __aenter__(self):
        await self.fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.fetcher.__aexit__(exc_type, exc_val, exc_tb)

    def _absolute_url(self, path: str) -> tuple[str, ParseResult]:
        full_url = to_absolute_url(path, self.config.base_url)
        try:
            parsed = urlparse(full_url)
            hostname = parsed.hostname
        except ValueError as e:
            raise InvalidURLError(full_url, f"Invalid URL: {full_url} ({e})") from e
        if parsed.scheme not in ("http", "https") or not hostname:
            raise InvalidURLError(full_url)
        return full_url, parsed

    def _route(self, path: str) -> tuple[str, ParseResult, str, URLPatternHandler]:
        full_url, parsed = self._absolute_url(path)
        resolved = self.registry.resolve_json_path(parsed)
        if resolved is None:
            raise InvalidURLError(full_url, f"No pattern handler found for: {full_url}")
        json_path, handler = resolved
        return full_url, parsed, json_path, handler

    @staticmethod
    def _request_url(parsed: ParseResult, json_path: str) -> str:
        if not json_path.endswith(".json"):
            json_path += ".json"
        return f"{origin(parsed)}/{json_path}"

    def handler_info(self, path: str) -> tuple[str, ResponseType] | None:
        """Get the identifier and response type of the handler for a URL."""
        try:
            _, parsed = self._absolute_url(path)
        except InvalidURLError:
            return None
        handler = self.registry.handler_for(parsed)
        if handler is None:
            return None
        return handler.identifier, handler.response_type

    def describe(self, path: str) -> ResolvedPath:
        """Report how a URL would be routed, without fetching."""
        full_url, parsed, json_path, handler = self._route(path)
        request_url = None
        if handler.response_type != ResponseType.TABLE_OF_CONTENTS and not is_deferred(json_path):
            request_url = self._request_url(parsed, json_path)
        return ResolvedPath(
            url=full_url,
            handler=handler.identifier,
            priority=handler.priority,
            response_type=handler.response_type,
            json_path=json_path,
            request_url=request_url,
        )

    async def fetch_documentation(self, path: str) -> DocCRenderNode:
        """Fetch documentation for a URL or a path relative to the base URL."""
        full_url, parsed, json_path, handler = self._route(path)
        logger.debug("Routed %s via %s -> %s", full_url, handler.identifier, json_path)

        # Table of contents pages use a different schema
        if handler.response_type == ResponseType.TABLE_OF_CONTENTS:
            raise TableOfContentsPage(full_url, TOC_GUIDANCE)

        if is_deferred(json_path):
            owner_repo = split_deferred(json_path)
            if owner_repo is None:
                raise InvalidURLError(full_url, f"Invalid GitHub repo path: {json_path}")
            return await self._github.resolve(*owner_repo)

        try:
            return await self.fetch_render_node(self._request_url(parsed, json_path))
        except NotFoundError:
            if handler.identifier == GenericDocCHandler.identifier:
                return await self._attempt_generic_fallback(parsed)
            raise

    async def _attempt_generic_fallback(self, url: ParseResult) -> DocCRenderNode:
        """Try the plain /documentation/ layout used by some static DocC sites."""
        path = trimmed_path(url)
        if not path.startswith("documentation/"):
            path = f"documentation/{path}"
        fallback_url = self._request_url(url, path)
        logger.debug("Generic fallback: %s", fallback_url)
        return await self.fetch_render_node(fallback_url)

    async def fetch_raw(self, url: str, accept: str | None = None) -> FetchResult:
        """GET a URL through the shared fetcher without interpreting it."""
        return await self.fetcher.fetch(url, accept=accept)

    async def fetch_render_node(self, url: str) -> DocCRenderNode:
        """GET a JSON endpoint and decode it as a render node."""
        result = await self.fetch_raw(url, accept=JSON_ACCEPT)

        if result.error:
            raise NetworkError(url, result.error)
        if result.status_code == 404:
            raise NotFoundError(url)
        if not result.success:
            raise NetworkError(url, f"HTTP {result.status_code}", status_code=result.status_code)

        try:
            return DocCRenderNode.model_validate_json(result.content)
        except ValidationError as e:
            raise DecodingError(url, f"{e.error_count()} schema error(s)") from e
