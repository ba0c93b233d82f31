"""Built-in hosting-convention handlers."""

from urllib.parse import ParseResult

from docc_retrieval.patterns.registry import ResponseType, URLPatternHandler
from docc_retrieval.utils.url_utils import trimmed_path

APPLE_HOST = "developer.apple.com"
HIG_ROOT = "design/human-interface-guidelines"
GITHUB_REPO_MARKER = "__github_repo__/"


def _host(url: ParseResult) -> str:
    return (url.hostname or "").lower()


def insert_data_segment(path: str) -> str:
    """Place ``data/`` directly before the first ``documentation/`` segment.

    Anything before that segment (project, version) is kept verbatim. Paths
    without a documentation segment are wrapped as ``data/documentation/<path>``.
    """
    segments = path.split("/") if path else []
    if "documentation" in segments:
        index = segments.index("documentation")
        if index > 0 and segments[index - 1] == "data":
            return path
        return "/".join(segments[:index] + ["data"] + segments[index:])
    if not path:
        return "data/documentation"
    return f"data/documentation/{path}"


class AppleDocumentationHandler(URLPatternHandler):
    """Apple Developer Documentation (frameworks, symbols).

    Matches developer.apple.com/documentation/*
    """

    identifier = "apple.documentation"
    priority = 100

    def can_handle(self, url: ParseResult) -> bool:
        if APPLE_HOST not in _host(url):
            return False
        path = url.path.lower()
        return path.startswith("/documentation/") or (
            "human-interface-guidelines" not in path
            and not path.startswith("/tutorials/")
            and not path.startswith("/design/")
        )

    def resolve_json_path(self, url: ParseResult) -> str:
        path = trimmed_path(url)
        if not path.startswith("documentation/"):
            path = f"documentation/{path}"
        # Framework docs live under /tutorials/data/documentation/
        return f"tutorials/data/{path}"


class AppleHIGHandler(URLPatternHandler):
    """Human Interface Guidelines leaf pages.

    Matches developer.apple.com/design/human-interface-guidelines/<topic>
    """

    identifier = "apple.hig"
    priority = 110

    def can_handle(self, url: ParseResult) -> bool:
        if APPLE_HOST not in _host(url):
            return False
        path = trimmed_path(url).lower()
        return "human-interface-guidelines" in path and len(path.split("/")) >= 3

    def resolve_json_path(self, url: ParseResult) -> str:
        path = trimmed_path(url)
        if path.startswith("design/"):
            path = path[len("design/"):]
        return f"tutorials/data/design/{path}"


class AppleHIGTableOfContentsHandler(URLPatternHandler):
    """Human Interface Guidelines root page (different schema)."""

    identifier = "apple.hig.toc"
    priority = 120
    response_type = ResponseType.TABLE_OF_CONTENTS

    def can_handle(self, url: ParseResult) -> bool:
        if APPLE_HOST not in _host(url):
            return False
        return trimmed_path(url).lower() == HIG_ROOT

    def resolve_json_path(self, url: ParseResult) -> str:
        return f"tutorials/data/{HIG_ROOT}"


class AppleTutorialsHandler(URLPatternHandler):
    """Apple Tutorials.

    Matches developer.apple.com/tutorials/*
    """

    identifier = "apple.tutorials"
    priority = 100

    def can_handle(self, url: ParseResult) -> bool:
        return APPLE_HOST in _host(url) and url.path.lower().startswith("/tutorials/")

    def resolve_json_path(self, url: ParseResult) -> str:
        path = trimmed_path(url)
        if path.startswith("tutorials/data/"):
            return path
        # tutorials/swiftui -> tutorials/data/tutorials/swiftui
        return f"tutorials/data/{path}"


class SwiftPackageIndexHandler(URLPatternHandler):
    """Swift Package Index hosted documentation."""

    identifier = "swiftpackageindex"
    priority = 100

    def can_handle(self, url: ParseResult) -> bool:
        return "swiftpackageindex.com" in _host(url)

    def resolve_json_path(self, url: ParseResult) -> str:
        return insert_data_segment(trimmed_path(url))


class GitHubRepositoryHandler(URLPatternHandler):
    """Bare repository reference, e.g. github.com/owner/repo.

    Produces a deferred path; the fetcher searches GitHub Pages for the
    actual DocC archive.
    """

    identifier = "github.repo"
    priority = 100

    def _owner_repo(self, url: ParseResult) -> list[str]:
        path = trimmed_path(url)
        if path.endswith(".git"):
            path = path[: -len(".git")]
        return [segment for segment in path.split("/") if segment]

    def can_handle(self, url: ParseResult) -> bool:
        return _host(url) in ("github.com", "www.github.com") and len(self._owner_repo(url)) >= 2

    def resolve_json_path(self, url: ParseResult) -> str:
        owner, repo = self._owner_repo(url)[:2]
        return f"{GITHUB_REPO_MARKER}{owner}/{repo}"


class GitHubPagesHandler(URLPatternHandler):
    """DocC archives exported to GitHub Pages (owner.github.io/repo/...)."""

    identifier = "github.pages"
    priority = 100

    def __init__(self, suffix: str = ".github.io"):
        self.suffix = suffix.lower()

    def can_handle(self, url: ParseResult) -> bool:
        return _host(url).endswith(self.suffix)

    def resolve_json_path(self, url: ParseResult) -> str:
        return insert_data_segment(trimmed_path(url))


class GenericDocCHandler(URLPatternHandler):
    """Fallback for any other DocC-hosted site. Always matches."""

    identifier = "generic.docc"
    priority = 0

    def can_handle(self, url: ParseResult) -> bool:
        return True

    def resolve_json_path(self, url: ParseResult) -> str:
        path = trimmed_path(url)
        if path.startswith("data/"):
            return path
        if path.startswith("documentation/"):
            return f"data/{path}"
        return f"data/documentation/{path}"


def builtin_handlers(pages_suffix: str = ".github.io") -> list[URLPatternHandler]:
    """Built-in handlers in registration order."""
    return [
        AppleHIGTableOfContentsHandler(),
        AppleHIGHandler(),
        AppleTutorialsHandler(),
        AppleDocumentationHandler(),
        SwiftPackageIndexHandler(),
        GitHubRepositoryHandler(),
        GitHubPagesHandler(pages_suffix),
        GenericDocCHandler(),
    ]


def is_deferred(path: str) -> bool:
    return path.startswith(GITHUB_REPO_MARKER)


def split_deferred(path: str) -> tuple[str, str] | None:
    """Return (owner, repo) encoded in a deferred path."""
    parts = [p for p in path[len(GITHUB_REPO_MARKER):].split("/") if p]
    if len(parts) < 2:
        return None
    return parts[0], parts[1]
