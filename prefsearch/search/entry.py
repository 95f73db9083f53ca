"""
Index Entry - One searchable unit with its display strings resolved.

Entries are created once per index build and never mutated. The category
is derived from the item kind; SearchCategory order is the order in which
a results list groups them.
"""

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Optional

from .items import CategoryRef, DialogRef, PluginRef, PreferenceRef
from .normalize import fold_diacritics


class SearchCategory(Enum):
    PLUGIN = "plugin"
    DIALOG = "dialog"
    CATEGORY = "category"
    PREFERENCE = "preference"


def category_of(item) -> SearchCategory:
    """Map an item to its category. Unknown item types are a bug."""
    if isinstance(item, PluginRef):
        return SearchCategory.PLUGIN
    if isinstance(item, CategoryRef):
        return SearchCategory.CATEGORY
    if isinstance(item, PreferenceRef):
        return SearchCategory.PREFERENCE
    if isinstance(item, DialogRef):
        return SearchCategory.DIALOG
    raise TypeError(f"Not a searchable item: {type(item).__name__}")


def _fold(text):
    return fold_diacritics(text.lower()) if text is not None else None


@dataclass(frozen=True)
class IndexEntry:
    """A searchable item plus its titles in the current and reference locale."""
    item: object
    localized_title: str
    english_title: str
    localized_summary: Optional[str]
    english_summary: Optional[str]
    category: SearchCategory

    @property
    def key(self) -> str:
        return self.item.key

    @property
    def identity(self) -> tuple[SearchCategory, str]:
        return self.category, self.item.key

    @property
    def is_enabled(self) -> bool:
        """False when the owning plugin is disabled."""
        owner = self.item.owner_plugin
        return owner.enabled if owner is not None else True

    @cached_property
    def search_fields(self) -> tuple[str, str, Optional[str], Optional[str]]:
        """Normalized titles and summaries, computed on first search."""
        return (
            _fold(self.localized_title),
            _fold(self.english_title),
            _fold(self.localized_summary),
            _fold(self.english_summary),
        )


def group_by_category(entries) -> dict[SearchCategory, list[IndexEntry]]:
    """
    Group entries for display.

    Categories follow SearchCategory order and empty ones are left out;
    entries keep their relative order.
    """
    groups = {category: [] for category in SearchCategory}
    for entry in entries:
        groups[entry.category].append(entry)
    return {category: items for category, items in groups.items() if items}
