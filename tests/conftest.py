"""Pytest configuration and fixtures."""

import json

import httpx
import pytest

from docc_retrieval.config import FetcherConfig, GitHubConfig
from docc_retrieval.fetcher import DocCJSONFetcher, HttpFetcher
from docc_retrieval.patterns import PatternRegistry


def render_node_payload(title: str = "Example", abstract: str = "An example framework.") -> dict:
    """Minimal DocC render-node JSON."""
    return {
        "schemaVersion": {"major": 0, "minor": 3, "patch": 0},
        "identifier": {
            "url": "doc://com.example/documentation/Example",
            "interfaceLanguage": "swift",
        },
        "kind": "symbol",
        "metadata": {"title": title, "roleHeading": "Framework"},
        "abstract": [{"type": "text", "text": abstract}],
        "sections": [],
    }


class MockServer:
    """Scripted HTTP responses keyed by full URL; anything else is a 404."""

    def __init__(self):
        self.routes: dict[str, httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add_json(self, url: str, body: object, status: int = 200) -> None:
        self.routes[url] = httpx.Response(status, content=json.dumps(body).encode())

    def add_text(self, url: str, text: str, status: int = 200) -> None:
        self.routes[url] = httpx.Response(status, text=text)

    def add_status(self, url: str, status: int) -> None:
        self.routes[url] = httpx.Response(status)

    def add_error(self, url: str, error: Exception) -> None:
        self.routes[url] = error

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        return route

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def server():
    return MockServer()


@pytest.fixture
def fetcher_config():
    return FetcherConfig()


@pytest.fixture
def http_fetcher(server, fetcher_config):
    return HttpFetcher(fetcher_config, transport=server.transport())


@pytest.fixture
def docc_fetcher(http_fetcher, fetcher_config):
    """DocCJSONFetcher wired to the mock server. Enter it with ``async with``."""
    return DocCJSONFetcher(
        fetcher_config,
        PatternRegistry.default(),
        github=GitHubConfig(),
        fetcher=http_fetcher,
    )


@pytest.fixture
def node_payload():
    """Factory for render-node JSON bodies."""
    return render_node_payload
