"""Resolve a bare GitHub repository to its hosted DocC documentation.

Where a repository publishes its DocC archive cannot be known up front, so
resolution is an ordered search over a bounded list of GitHub Pages
candidates:

1. unversioned archives, one per plausible module name,
2. versioned archives for the most recent releases (newest first),
3. default-branch and plain ``documentation/`` layouts,
4. as a last resort, the raw markdown of a ``.docc`` bundle in the repository.

Candidates are tried one at a time and the first that decodes wins. Nothing is
cached between resolutions.
"""

import json
import logging
import re
from typing import TYPE_CHECKING

from docc_retrieval.config import GitHubConfig
from docc_retrieval.fetcher.errors import FetcherError, NotFoundError
from docc_retrieval.models import DocCRenderNode
from docc_retrieval.utils.ranking import markdown_rank_key
from docc_retrieval.utils.versions import versions_from_tags

if TYPE_CHECKING:
    from docc_retrieval.fetcher.docc_fetcher import DocCJSONFetcher

logger = logging.getLogger(__name__)

GITHUB_API_ACCEPT = "application/vnd.github.v3+json"
LANGUAGE_PREFIX = "swift-"
DOCC_SUFFIX = ".docc"
GUIDES_DIR = "guides"

_LIST_ITEM_RE = re.compile(r"^([-*+]|\d+[.)])\s")


def module_name_candidates(repo: str) -> list[str]:
    """Plausible DocC module names for a repository name.

    swift-composable-architecture -> composablearchitecture etc. Order is
    significant; duplicates are dropped.
    """
    names = [repo.replace("-", "").replace("_", "").lower()]
    if repo.lower().startswith(LANGUAGE_PREFIX):
        stripped = repo[len(LANGUAGE_PREFIX):]
        names.append(stripped.replace("-", "").replace("_", "").lower())
    names.append(repo.lower())
    return list(dict.fromkeys(names))


def pages_base_url(owner: str, repo: str, pages_suffix: str = ".github.io") -> str:
    return f"https://{owner.lower()}{pages_suffix}/{repo}"


def build_candidate_urls(
    owner: str,
    repo: str,
    versions: list[str],
    default_branch: str = "main",
    pages_suffix: str = ".github.io",
) -> list[str]:
    """Build the ordered list of GitHub Pages JSON URLs to probe."""
    base = pages_base_url(owner, repo, pages_suffix)
    modules = module_name_candidates(repo)

    # Unversioned paths first (most common for simple projects)
    candidates = [f"{base}/data/documentation/{m}.json" for m in modules]

    for version in versions:
        for m in modules:
            candidates.append(f"{base}/{version}/data/documentation/{m}.json")

    for m in modules:
        candidates.append(f"{base}/{default_branch}/data/documentation/{m}.json")
        candidates.append(f"{base}/documentation/{m}.json")
    candidates.append(f"{base}/{default_branch}/data/documentation/{repo}.json")

    return list(dict.fromkeys(candidates))


def _strip_code_markers(text: str) -> str:
    return text.replace("`", "").strip()


def render_node_from_markdown(markdown: str, url: str, fallback_title: str) -> DocCRenderNode:
    """Build a minimal render node from a DocC markdown article.

    Title: first level-1 heading. Abstract: first non-empty line that is
    neither a heading nor a list item.
    """
    title: str | None = None
    abstract: str | None = None
    for raw_line in markdown.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("# ") and title is None:
            title = _strip_code_markers(line[2:])
            continue
        if line.startswith("#") or _LIST_ITEM_RE.match(line):
            continue
        if abstract is None:
            abstract = line
        if title is not None and abstract is not None:
            break

    return DocCRenderNode.model_validate(
        {
            "schemaVersion": {"major": 0, "minor": 3, "patch": 0},
            "identifier": {"url": url, "interfaceLanguage": "swift"},
            "kind": "article",
            "metadata": {"title": title or fallback_title},
            "abstract": [{"type": "text", "text": abstract}] if abstract else [],
        }
    )


def _rank_markdown(paths: list[str], bundle_name: str) -> list[str]:
    """Module-named files first, then overviews, then alphabetical."""
    def key(path: str) -> tuple[bool, bool, str]:
        return markdown_rank_key(path.rsplit("/", 1)[-1].rsplit(".", 1)[0], bundle_name)

    return sorted(paths, key=key)


def select_bundle_markdown(tree: list[dict], include_guides: bool) -> list[tuple[str, str]]:
    """Pick one markdown file per ``.docc`` bundle from a recursive git tree.

    Returns ``(bundle_name, path)`` pairs in tree order. When include_guides is
    False, files under a bundle's ``Guides/`` directory are ignored.
    """
    bundles: list[str] = []
    blobs: list[str] = []
    for item in tree:
        path = item.get("path")
        if not isinstance(path, str):
            continue
        if item.get("type") == "tree" and path.endswith(DOCC_SUFFIX):
            bundles.append(path)
        elif item.get("type") == "blob" and path.lower().endswith(".md"):
            blobs.append(path)

    selected: list[tuple[str, str]] = []
    for bundle in bundles:
        prefix = bundle + "/"
        candidates = []
        for path in blobs:
            if not path.startswith(prefix):
                continue
            relative = path[len(prefix):]
            if not include_guides and relative.split("/", 1)[0].lower() == GUIDES_DIR:
                continue
            candidates.append(path)
        if candidates:
            name = bundle.rsplit("/", 1)[-1][: -len(DOCC_SUFFIX)]
            selected.append((name, _rank_markdown(candidates, name)[0]))
    return selected


class GitHubRepoResolver:
    """Ordered, best-effort search for a repository's DocC archive."""

    def __init__(self, fetcher: "DocCJSONFetcher", config: GitHubConfig):
        self.fetcher = fetcher
        self.config = config

    async def resolve(self, owner: str, repo: str) -> DocCRenderNode:
        """Return the first candidate that fetches and decodes."""
        versions = await self.fetch_recent_releases(owner, repo)
        candidates = build_candidate_urls(
            owner,
            repo,
            versions,
            default_branch=self.config.default_branch,
            pages_suffix=self.config.pages_suffix,
        )
        logger.debug("Probing %d candidates for %s/%s", len(candidates), owner, repo)

        for url in candidates:
            try:
                node = await self.fetcher.fetch_render_node(url)
            except FetcherError as e:
                logger.debug("Candidate failed: %s", e)
                continue
            logger.info("Resolved %s/%s to %s", owner, repo, url)
            return node

        node = await self.fetch_markdown_fallback(owner, repo)
        if node is not None:
            return node

        raise NotFoundError(
            f"github.com/{owner}/{repo}",
            f"No DocC documentation found for {owner}/{repo}",
        )

    async def _get_json(self, url: str) -> object | None:
        result = await self.fetcher.fetch_raw(url, accept=GITHUB_API_ACCEPT)
        if result.status_code != 200 or result.error:
            logger.debug("GitHub API %s -> %s", url, result.error or result.status_code)
            return None
        try:
            return json.loads(result.content)
        except ValueError:
            logger.debug("GitHub API returned invalid JSON: %s", url)
            return None

    async def fetch_recent_releases(self, owner: str, repo: str) -> list[str]:
        """Normalized release versions, newest first. Empty on any failure."""
        if self.config.release_limit == 0:
            return []
        url = (
            f"{self.config.api_url}/repos/{owner}/{repo}/releases"
            f"?per_page={self.config.release_limit}"
        )
        releases = await self._get_json(url)
        if not isinstance(releases, list):
            return []
        tags = [
            release["tag_name"]
            for release in releases
            if isinstance(release, dict) and isinstance(release.get("tag_name"), str)
        ]
        return versions_from_tags(tags)

    async def fetch_markdown_fallback(self, owner: str, repo: str) -> DocCRenderNode | None:
        """Synthesize a render node from a ``.docc`` bundle's raw markdown."""
        branch = self.config.default_branch
        tree_url = f"{self.config.api_url}/repos/{owner}/{repo}/git/trees/{branch}?recursive=1"
        payload = await self._get_json(tree_url)
        if not isinstance(payload, dict) or not isinstance(payload.get("tree"), list):
            return None
        tree = payload["tree"]

        tried: set[str] = set()
        # Guides are skipped on the first pass only
        for include_guides in (False, True):
            for bundle_name, path in select_bundle_markdown(tree, include_guides):
                if path in tried:
                    continue
                tried.add(path)
                raw_url = f"{self.config.raw_url}/{owner}/{repo}/{branch}/{path}"
                result = await self.fetcher.fetch_raw(raw_url)
                if not result.success:
                    logger.debug("Raw markdown %s -> %s", raw_url, result.error or result.status_code)
                    continue
                logger.info("Using raw markdown from %s", raw_url)
                return render_node_from_markdown(result.text, raw_url, bundle_name)
        return None
