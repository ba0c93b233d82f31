"""Fetching and decoding DocC JSON."""

from docc_retrieval.fetcher.base import BaseFetcher, FetchResult
from docc_retrieval.fetcher.docc_fetcher import DocCJSONFetcher, ResolvedPath
from docc_retrieval.fetcher.errors import (
    DecodingError,
    FetcherError,
    InvalidURLError,
    NetworkError,
    NotFoundError,
    TableOfContentsPage,
)
from docc_retrieval.fetcher.github import GitHubRepoResolver
from docc_retrieval.fetcher.http_fetcher import HttpFetcher

__all__ = [
    "BaseFetcher",
    "DecodingError",
    "DocCJSONFetcher",
    "FetchResult",
    "FetcherError",
    "GitHubRepoResolver",
    "HttpFetcher",
    "InvalidURLError",
    "NetworkError",
    "NotFoundError",
    "ResolvedPath",
    "TableOfContentsPage",
]
