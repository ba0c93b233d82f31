"""Keyword search for example source files in a GitHub repository."""

import json
import logging

from pydantic import BaseModel

from docc_retrieval.config import GitHubConfig
from docc_retrieval.fetcher.base import BaseFetcher
from docc_retrieval.fetcher.errors import NetworkError, NotFoundError
from docc_retrieval.fetcher.github import GITHUB_API_ACCEPT

logger = logging.getLogger(__name__)

EXAMPLE_MARKERS = ["Example", "Demo", "Sample", "Playground", "Tests"]


class ExampleSearchResult(BaseModel):
    """Matching example files, in tree order."""

    owner: str
    repo: str
    files: list[str] = []


def match_example_files(
    tree: list[dict],
    keyword: str | None = None,
    extension: str = ".swift",
) -> list[str]:
    """Filter a recursive git tree down to example source files."""
    matches = []
    for item in tree:
        path = item.get("path")
        if item.get("type") != "blob" or not isinstance(path, str):
            continue
        if not path.endswith(extension):
            continue
        if not any(marker in path for marker in EXAMPLE_MARKERS):
            continue
        if keyword and keyword.lower() not in path.lower():
            continue
        matches.append(path)
    return matches


class ExampleFinder:
    """Find example files through the GitHub tree API."""

    def __init__(self, fetcher: BaseFetcher, config: GitHubConfig):
        self.fetcher = fetcher
        self.config = config

    async def find(self, owner: str, repo: str, keyword: str | None = None) -> ExampleSearchResult:
        url = (
            f"{self.config.api_url}/repos/{owner}/{repo}/git/trees/"
            f"{self.config.default_branch}?recursive=1"
        )
        result = await self.fetcher.fetch(url, accept=GITHUB_API_ACCEPT)
        if result.error:
            raise NetworkError(url, result.error)
        if result.status_code == 404:
            raise NotFoundError(url, f"Repository tree not found for {owner}/{repo}")
        if not result.success:
            raise NetworkError(url, f"HTTP {result.status_code}", status_code=result.status_code)

        try:
            payload = json.loads(result.content)
        except ValueError as e:
            raise NetworkError(url, "Could not fetch repository structure") from e
        tree = payload.get("tree") if isinstance(payload, dict) else None
        if not isinstance(tree, list):
            raise NetworkError(url, "Could not fetch repository structure")

        files = match_example_files(tree, keyword)
        logger.debug("Found %d example files in %s/%s", len(files), owner, repo)
        return ExampleSearchResult(owner=owner, repo=repo, files=files)
