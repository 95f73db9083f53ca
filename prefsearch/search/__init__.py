"""
Search package - Index building and query routing.

Collects plugins, provider items and settings into one index and answers
free-text queries against it through priority-ordered handlers (category
sentinels, relevance scoring).
"""

from .builder import IndexSnapshot, ParentScreen, SearchIndexBuilder
from .entry import IndexEntry, SearchCategory, category_of, group_by_category
from .items import (
    CategoryRef,
    DialogRef,
    PluginInfo,
    PluginRef,
    PreferenceKey,
    PreferenceRef,
    ScreenDef,
    SearchableItem,
)
from .normalize import normalize
from .providers import ProviderRegistry, SearchableProvider, StaticSearchableProvider, TomlSearchableProvider
from .router import QueryRouter, SearchHandler, rank

__all__ = [
    "CategoryRef",
    "DialogRef",
    "IndexEntry",
    "IndexSnapshot",
    "ParentScreen",
    "PluginInfo",
    "PluginRef",
    "PreferenceKey",
    "PreferenceRef",
    "ProviderRegistry",
    "QueryRouter",
    "ScreenDef",
    "SearchCategory",
    "SearchHandler",
    "SearchIndexBuilder",
    "SearchableItem",
    "SearchableProvider",
    "StaticSearchableProvider",
    "TomlSearchableProvider",
    "category_of",
    "group_by_category",
    "normalize",
    "rank",
]
