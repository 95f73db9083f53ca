"""
Query Router - Dispatches search queries to priority-ordered handlers.

Each handler declares a priority (lower = higher priority) and a matches()
method. The router finds the first matching handler and returns its results.
Relevance scoring is the fallback (highest priority number); category
sentinels such as "%plugins%" are checked before it and override it.
"""

from abc import ABC, abstractmethod

from loguru import logger

from .entry import IndexEntry


class SearchHandler(ABC):
    """Base class for all search handlers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Handler identifier."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Lower number = checked first. Relevance scoring should be ~1000."""
        ...

    @abstractmethod
    def matches(self, query: str) -> bool:
        """Return True if this handler should process the query."""
        ...

    @abstractmethod
    def get_results(self, query: str, index) -> list[IndexEntry]:
        """Return the entries of index that answer the query."""
        ...


class QueryRouter:
    """Routes queries to the appropriate handler based on priority."""

    def __init__(self, handlers=()):
        self._handlers: list[SearchHandler] = []
        for handler in handlers:
            self.register(handler)

    def register(self, handler: SearchHandler) -> None:
        """Register a handler and re-sort by priority (stable for equal priorities)."""
        self._handlers.append(handler)
        self._handlers.sort(key=lambda h: h.priority)

    def route(self, query: str, index) -> tuple[str, list[IndexEntry]]:
        """
        Find the first matching handler and return its results.

        Args:
            query: The raw search query string
            index: Sequence of IndexEntry to search

        Returns:
            Tuple of (handler_name, results_list).
            Returns ("none", []) for a blank query or if no handler matches.
        """
        if not query or not query.strip():
            return "none", []

        for handler in self._handlers:
            if handler.matches(query):
                results = handler.get_results(query, index)
                logger.debug(f"'{query}' -> {handler.name}: {len(results)} of {len(index)} entries")
                return handler.name, results

        return "none", []


def default_router() -> QueryRouter:
    """Router with the sentinel filter and relevance scoring registered."""
    from .handlers import CategoryFilterHandler, RelevanceHandler

    return QueryRouter([CategoryFilterHandler(), RelevanceHandler()])


def rank(index, query: str, router: QueryRouter | None = None) -> list[IndexEntry]:
    """Entries of index matching query, best first."""
    _, results = (router or default_router()).route(query, index)
    return results
