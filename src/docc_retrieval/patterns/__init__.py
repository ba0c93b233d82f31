"""URL pattern routing."""

from docc_retrieval.patterns.handlers import (
    GITHUB_REPO_MARKER,
    AppleDocumentationHandler,
    AppleHIGHandler,
    AppleHIGTableOfContentsHandler,
    AppleTutorialsHandler,
    GenericDocCHandler,
    GitHubPagesHandler,
    GitHubRepositoryHandler,
    SwiftPackageIndexHandler,
    builtin_handlers,
)
from docc_retrieval.patterns.registry import PatternRegistry, ResponseType, URLPatternHandler

__all__ = [
    "GITHUB_REPO_MARKER",
    "AppleDocumentationHandler",
    "AppleHIGHandler",
    "AppleHIGTableOfContentsHandler",
    "AppleTutorialsHandler",
    "GenericDocCHandler",
    "GitHubPagesHandler",
    "GitHubRepositoryHandler",
    "PatternRegistry",
    "ResponseType",
    "SwiftPackageIndexHandler",
    "URLPatternHandler",
    "builtin_handlers",
]
