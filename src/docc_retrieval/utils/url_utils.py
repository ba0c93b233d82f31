"""URL manipulation utilities."""

import re
from urllib.parse import ParseResult, urlparse

_GITHUB_REPO_RE = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/([^/\s]+)/([^/\s#?]+)")
_BARE_REPO_RE = re.compile(r"^([A-Za-z0-9][\w.-]*)/([\w.-]+)$")


def trimmed_path(url: ParseResult) -> str:
    """Return the URL path without leading or trailing slashes."""
    return url.path.strip("/")


def ensure_scheme(source: str) -> str:
    """Prepend https:// to inputs that carry no scheme."""
    if not source.lower().startswith(("http://", "https://")):
        return "https://" + source
    return source


def to_absolute_url(path: str, base_url: str) -> str:
    """Join a bare path onto base_url; absolute URLs pass through."""
    if "://" in path:
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def origin(url: ParseResult) -> str:
    """Return scheme://host for a parsed URL."""
    return f"{url.scheme}://{url.netloc}"


def parse_github_repo(source: str) -> tuple[str, str] | None:
    """Extract (owner, repo) from a github.com URL or a bare owner/repo string."""
    source = source.strip()
    match = _GITHUB_REPO_RE.search(source) or _BARE_REPO_RE.match(source)
    if not match:
        return None
    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        return None
    return owner, repo


def is_bare_repo_reference(source: str) -> bool:
    """Check if the input looks like owner/repo with no host."""
    return "://" not in source and "." not in source.split("/", 1)[0] and bool(
        _BARE_REPO_RE.match(source.strip())
    )
