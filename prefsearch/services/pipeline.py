"""
Search Pipeline - Debounced query handling and the observable search state.

Typing updates the query immediately; the search itself waits until input
has settled for debounce_ms (300 ms by default). Each keystroke cancels
the pending search and starts a new window, so "a", "ab", "abc" typed
quickly cost one search, for "abc". A blank query clears the results at
once without scheduling anything.

At most one search runs at a time per pipeline. A search whose query has
been superseded by the time it finishes does not publish its results.
"""

import threading
from dataclasses import dataclass, field, replace

from gi.repository import GObject
from loguru import logger

from ..search.entry import IndexEntry
from ..utils.scheduler import GLibScheduler

DEFAULT_DEBOUNCE_MS = 300


@dataclass(frozen=True)
class SearchState:
    """Snapshot of the search UI state. Replaced, never modified."""
    is_active: bool = False
    query: str = ""
    results: list[IndexEntry] = field(default_factory=list)
    is_searching: bool = False


class SearchPipeline(GObject.Object):
    """
    Owns the search state for one search field.

    Signals:
        changed: Emitted with the new SearchState after every update

    Methods:
        activate() / deactivate(): enter or leave search mode
        change_query(text): user typed
        clear_query(): empty the field, stay in search mode
        select_result(entry): pick a result, leaves search mode
        invalidate_index(): force an index rebuild on the next search
        close(): cancel pending work, the pipeline is done
    """

    __gtype_name__ = "PrefsearchSearchPipeline"

    __gsignals__ = {
        "changed": (GObject.SignalFlags.RUN_FIRST, None, (object,)),
    }

    def __init__(self, builder, scheduler=None, debounce_ms: int = DEFAULT_DEBOUNCE_MS):
        super().__init__()
        if debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {debounce_ms}")

        self.builder = builder
        self.scheduler = scheduler or GLibScheduler()
        self.debounce_ms = debounce_ms

        self._state = SearchState()
        self._lock = threading.RLock()
        self._search_lock = threading.Lock()
        self._pending_source = None
        self._generation = 0
        self._closed = False

    @classmethod
    def from_settings(cls, builder, settings: dict, scheduler=None) -> "SearchPipeline":
        return cls(builder, scheduler=scheduler, debounce_ms=int(settings["search"]["debounce_ms"]))

    @property
    def state(self) -> SearchState:
        return self._state

    # ------------- operations -------------

    def activate(self) -> None:
        with self._lock:
            self._cancel_pending()
            self._update(is_active=True, query="", results=[], is_searching=False)

    def deactivate(self) -> None:
        with self._lock:
            self._cancel_pending()
            self._update(is_active=False, query="", results=[], is_searching=False)

    def change_query(self, text: str) -> None:
        """Show text right away; search for it once typing pauses."""
        with self._lock:
            self._update(query=text)
            self._schedule_search(text)

    def clear_query(self) -> None:
        with self._lock:
            self._update(query="", results=[])
            self._schedule_search("")

    def select_result(self, entry: IndexEntry) -> IndexEntry:
        """Close search after a result is picked and hand the entry back for navigation."""
        self.deactivate()
        return entry

    def invalidate_index(self) -> None:
        """Forget the index; the next search rebuilds it. Does not search again."""
        self.builder.invalidate()

    def close(self) -> None:
        """Cancel any pending search. Late timer callbacks are ignored."""
        with self._lock:
            self._closed = True
            self._cancel_pending()
        logger.debug("Search pipeline closed")

    # ------------- debounce -------------

    def _schedule_search(self, text: str) -> None:
        self._cancel_pending()
        if self._closed:
            return

        if not text.strip():
            self._update(results=[], is_searching=False)
            return

        self._pending_source = self.scheduler.timeout_add(
            self.debounce_ms, self._on_debounce_elapsed, text, self._generation
        )

    def _cancel_pending(self) -> None:
        """Drop the pending search, if any. Must hold self._lock."""
        self._generation += 1
        if self._pending_source is not None:
            self.scheduler.source_remove(self._pending_source)
            self._pending_source = None

    def _on_debounce_elapsed(self, text: str, generation: int) -> bool:
        with self._search_lock:
            with self._lock:
                if self._closed or generation != self._generation:
                    return False
                self._pending_source = None
                self._update(is_searching=True)

            try:
                results = self.builder.search(text)
            except Exception:
                logger.exception(f"Search for '{text}' failed")
                results = []

            with self._lock:
                if self._closed or generation != self._generation:
                    logger.debug(f"Dropping results for superseded query '{text}'")
                    return False
                self._update(results=list(results), is_searching=False)

        logger.debug(f"Published {len(results)} results for '{text}'")
        return False  # Don't repeat

    # ------------- state -------------

    def _update(self, **changes) -> None:
        with self._lock:
            self._state = replace(self._state, **changes)
            state = self._state
        self.emit("changed", state)
