"""
Search Index Builder - Collects every searchable item into one index.

Sources, in precedence order (first writer of a (category, key) pair wins):
  1. Plugins visible in at least one of their types
  2. Items from registered SearchableProviders, in registration order
  3. Plugin configuration screens, walked recursively
  4. Screens declared by providers, walked for their sub-screens
  5. Every setting key of the preference registry

Before step 5 the screen trees are walked once more to record which screen
holds each setting (the parent-screen map), so a setting found by search
can open its screen. Provider trees are walked before plugin trees and a
later listing of the same setting replaces an earlier one.

The index is built lazily on first use and memoized until invalidate().
A rebuild produces a fresh snapshot which replaces the old one in a single
assignment; readers never see a half-built index.
"""

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from loguru import logger

from .entry import IndexEntry, category_of
from .items import (
    CategoryRef,
    PluginInfo,
    PluginRef,
    PreferenceKey,
    PreferenceRef,
    ScreenDef,
    is_valid_ref,
)
from .providers import ProviderRegistry
from .router import QueryRouter, default_router


@dataclass(frozen=True)
class ParentScreen:
    """Where a setting lives: its screen, the icon to show, the owning plugin."""
    screen_key: str
    icon_ref: Optional[str] = None
    owner_plugin: Optional[PluginInfo] = None


@dataclass(frozen=True)
class IndexSnapshot:
    entries: tuple[IndexEntry, ...]
    parent_screens: Mapping[str, ParentScreen]


class SearchIndexBuilder:
    """
    Builds and caches the search index.

    Collaborators:
        plugins: object with list_plugins() -> [PluginInfo]
        providers: ProviderRegistry (or any iterable of providers)
        preferences: object with all_preference_keys() -> [PreferenceKey]
        strings: object with resolve(ref) and resolve_reference(ref)
    """

    def __init__(self, plugins, providers, preferences, strings, router: QueryRouter = None):
        self.plugins = plugins
        self.providers = providers if providers is not None else ProviderRegistry()
        self.preferences = preferences
        self.strings = strings
        self.router = router or default_router()

        self._snapshot: IndexSnapshot | None = None
        self._generation = 0
        self._build_lock = threading.Lock()

    # ------------- cache -------------

    def build(self) -> IndexSnapshot:
        """Return the memoized snapshot, building it first if needed."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._build_lock:
            # Another caller may have finished a build while we waited
            if self._snapshot is not None:
                return self._snapshot
            generation = self._generation
            snapshot = self._build_snapshot()
            # An invalidate() during the build makes this snapshot stale
            if generation == self._generation:
                self._snapshot = snapshot
            return snapshot

    def get_index(self) -> tuple[IndexEntry, ...]:
        return self.build().entries

    def get_parent_screens(self) -> Mapping[str, ParentScreen]:
        return self.build().parent_screens

    def invalidate(self) -> None:
        """Drop the memoized index. The next get_index() rebuilds from scratch."""
        self._generation += 1
        self._snapshot = None
        logger.debug("Search index invalidated")

    invalidate_index = invalidate

    def search(self, query: str) -> list[IndexEntry]:
        """Synchronous, non-debounced search over the current index."""
        if not query or not query.strip():
            return []
        _, results = self.router.route(query, self.get_index())
        return results

    # ------------- building -------------

    def _build_snapshot(self) -> IndexSnapshot:
        entries: list[IndexEntry] = []
        seen: set = set()
        parents: dict[str, ParentScreen] = {}

        def add_if_new(item) -> None:
            identity = (category_of(item), item.key)
            if identity not in seen:
                seen.add(identity)
                entries.append(self._create_entry(item))

        plugins = list(self.plugins.list_plugins())
        provider_items = [
            item
            for provider in self.providers
            for item in provider.get_searchable_items()
        ]

        # 1. Plugins
        for plugin in plugins:
            if plugin.is_visible_anywhere() and is_valid_ref(plugin.title_ref):
                add_if_new(PluginRef(plugin))

        # 2. Provider items
        for item in provider_items:
            add_if_new(item)

        provider_screens = [item for item in provider_items if isinstance(item, CategoryRef)]
        plugin_screens = [
            plugin for plugin in plugins if isinstance(plugin.root_screen, ScreenDef)
        ]

        # 3. Plugin screen trees
        for plugin in plugin_screens:
            root = plugin.root_screen
            add_if_new(CategoryRef(root, owner_plugin=plugin))
            self._walk_screen(root, root.icon_ref, plugin, add_if_new, ())

        # 4. Sub-screens of provider screens; the roots were added in step 2
        for item in provider_screens:
            self._walk_screen(item.screen, item.icon_ref, item.owner_plugin, add_if_new, ())

        # Parent screens: provider trees, then plugin trees; the last listing wins
        for item in provider_screens:
            self._map_parents(item.screen, item.icon_ref, item.owner_plugin, parents, ())
        for plugin in plugin_screens:
            root = plugin.root_screen
            self._map_parents(root, root.icon_ref, plugin, parents, ())

        # 5. Individual settings
        for pref in self.preferences.all_preference_keys():
            if not is_valid_ref(pref.title_ref):
                continue
            parent = parents.get(pref.key)
            add_if_new(PreferenceRef(
                preference=pref,
                parent_screen_key=parent.screen_key if parent else None,
                inherited_icon_ref=parent.icon_ref if parent else None,
                owner_plugin=parent.owner_plugin if parent else None,
            ))

        logger.debug(
            f"Built search index: {len(entries)} entries, "
            f"{len(parents)} settings with a parent screen"
        )
        return IndexSnapshot(tuple(entries), MappingProxyType(parents))

    def _walk_screen(self, screen: ScreenDef, icon_ref, owner, add_if_new, ancestors) -> None:
        """
        Add the sub-screens of screen, recursively.

        icon_ref is the screen's effective icon (its own, else inherited).
        ancestors holds the keys of enclosing screens; a sub-screen that is
        its own ancestor is skipped rather than walked forever.
        """
        path = ancestors + (screen.key,)
        for child in screen.items:
            if not isinstance(child, ScreenDef):
                continue
            if child.key in path:
                logger.warning(
                    f"Screen cycle detected: '{child.key}' is nested in itself "
                    f"({' > '.join(path)}), skipping"
                )
                continue
            add_if_new(CategoryRef(child, owner_plugin=owner, inherited_icon_ref=icon_ref))
            self._walk_screen(child, child.icon_ref or icon_ref, owner, add_if_new, path)

    def _map_parents(self, screen: ScreenDef, icon_ref, owner, parents, ancestors) -> None:
        """Point every setting listed under screen at the screen that lists it."""
        path = ancestors + (screen.key,)
        for child in screen.items:
            if isinstance(child, PreferenceKey):
                parents[child.key] = ParentScreen(screen.key, icon_ref, owner)
            elif isinstance(child, ScreenDef) and child.key not in path:
                self._map_parents(child, child.icon_ref or icon_ref, owner, parents, path)

    def _create_entry(self, item) -> IndexEntry:
        category = category_of(item)
        summary_ref = item.summary_ref
        return IndexEntry(
            item=item,
            localized_title=self._safe_resolve(item.title_ref),
            english_title=self._safe_resolve_reference(item.title_ref),
            localized_summary=self._safe_resolve(summary_ref) if summary_ref is not None else None,
            english_summary=self._safe_resolve_reference(summary_ref) if summary_ref is not None else None,
            category=category,
        )

    def _safe_resolve(self, ref) -> str:
        if not is_valid_ref(ref):
            return ""
        try:
            return self.strings.resolve(ref)
        except Exception as e:
            logger.debug(f"Could not resolve '{ref}': {e}")
            return ""

    def _safe_resolve_reference(self, ref) -> str:
        if not is_valid_ref(ref):
            return ""
        try:
            return self.strings.resolve_reference(ref)
        except Exception as e:
            logger.debug(f"Could not resolve reference string '{ref}': {e}")
            return ""
