"""URL pattern handler interface and priority-ordered registry."""

import itertools
import threading
from abc import ABC, abstractmethod
from enum import Enum
from urllib.parse import ParseResult, urlparse


class ResponseType(str, Enum):
    """Kind of payload a pattern's JSON endpoint returns."""

    RENDER_NODE = "renderNode"
    TABLE_OF_CONTENTS = "tableOfContents"
    SEARCH_INDEX = "searchIndex"
    CUSTOM = "custom"


class URLPatternHandler(ABC):
    """Recognizes one hosting convention and maps its URLs to JSON endpoints.

    Use priority 100 for specific patterns and 0 for catch-all fallbacks.
    """

    identifier: str
    priority: int = 100
    response_type: ResponseType = ResponseType.RENDER_NODE

    @abstractmethod
    def can_handle(self, url: ParseResult) -> bool:
        """Check if this handler can process the given URL."""
        ...

    @abstractmethod
    def resolve_json_path(self, url: ParseResult) -> str:
        """Transform the URL path into the relative JSON endpoint path."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(identifier={self.identifier!r}, priority={self.priority})"


class PatternRegistry:
    """Registry of URL pattern handlers, checked highest priority first.

    Handlers with equal priority are checked in registration order. Both
    registration and lookup hold the same lock so the registry can be shared
    across threads for the life of the process.
    """

    def __init__(self, handlers: list[URLPatternHandler] | None = None):
        self._lock = threading.Lock()
        self._counter = itertools.count()
        self._entries: list[tuple[int, int, URLPatternHandler]] = []
        for handler in handlers or []:
            self.register(handler)

    @classmethod
    def default(cls, pages_suffix: str = ".github.io") -> "PatternRegistry":
        """Create a registry populated with the built-in handlers.

        pages_suffix is the host suffix of GitHub Pages sites.
        """
        from docc_retrieval.patterns.handlers import builtin_handlers

        return cls(builtin_handlers(pages_suffix))

    def register(self, handler: URLPatternHandler) -> None:
        """Register a handler."""
        with self._lock:
            self._entries.append((-handler.priority, next(self._counter), handler))
            self._entries.sort(key=lambda entry: (entry[0], entry[1]))

    def unregister(self, identifier: str) -> bool:
        """Remove every handler with the given identifier."""
        with self._lock:
            before = len(self._entries)
            self._entries = [e for e in self._entries if e[2].identifier != identifier]
            return len(self._entries) != before

    @property
    def handlers(self) -> list[URLPatternHandler]:
        with self._lock:
            return [entry[2] for entry in self._entries]

    @property
    def registered_handlers(self) -> list[str]:
        """Describe registered handlers in dispatch order."""
        return [f"{h.identifier} (priority: {h.priority})" for h in self.handlers]

    def handler_for(self, url: ParseResult | str) -> URLPatternHandler | None:
        """Find the handler for a given URL."""
        if isinstance(url, str):
            url = urlparse(url)
        for handler in self.handlers:
            if handler.can_handle(url):
                return handler
        return None

    def resolve_json_path(
        self, url: ParseResult | str
    ) -> tuple[str, URLPatternHandler] | None:
        """Resolve the JSON path for a URL along with the matching handler."""
        if isinstance(url, str):
            url = urlparse(url)
        handler = self.handler_for(url)
        if handler is None:
            return None
        return handler.resolve_json_path(url), handler
