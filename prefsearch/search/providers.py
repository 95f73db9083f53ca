"""
Searchable Providers - Pluggable suppliers of built-in (non-plugin) items.

A provider returns its items in a fixed order for one build and knows
nothing about locales or other providers. Providers are registered once
at startup on a ProviderRegistry and enumerated in registration order.

TomlSearchableProvider reads dialogs and screens from a data file:

    [dialogs.treatments]
    title = "treatments"
    icon = "ic_treatments"
    summary = "treatments_desc"

    [screens.protection]
    title = "protection"
    icon = "key"
    preferences = [
        { key = "master_password", title = "master_password" },
    ]

    [screens.protection.screens.timeouts]
    title = "protection_timeouts"
"""

from abc import ABC, abstractmethod
from pathlib import Path

import toml
from loguru import logger

from .items import CategoryRef, DialogRef, PreferenceKey, ScreenDef, is_valid_ref


class SearchableProvider(ABC):
    """Base class for suppliers of built-in searchable items."""

    @abstractmethod
    def get_searchable_items(self) -> list:
        """Return this provider's items, unresolved and in display order."""
        ...


class StaticSearchableProvider(SearchableProvider):
    """Serves a fixed list of items."""

    def __init__(self, items=()):
        self.items = list(items)

    def get_searchable_items(self) -> list:
        return list(self.items)


class ProviderRegistry:
    """Ordered set of providers consulted on every index build."""

    def __init__(self, providers=()):
        self._providers: list[SearchableProvider] = list(providers)

    def register(self, provider: SearchableProvider) -> None:
        """Append a provider. Registering the same provider twice is a no-op."""
        if any(p is provider for p in self._providers):
            return
        self._providers.append(provider)

    def unregister(self, provider: SearchableProvider) -> None:
        self._providers = [p for p in self._providers if p is not provider]

    def __iter__(self):
        # Snapshot so a registration during a build can't change it
        return iter(list(self._providers))

    def __len__(self) -> int:
        return len(self._providers)


class TomlSearchableProvider(SearchableProvider):
    """Dialogs and screens declared in a TOML data file."""

    def __init__(self, path):
        self.path = Path(path)
        self.items = self._load_items()

    def get_searchable_items(self) -> list:
        return list(self.items)

    def _load_items(self) -> list:
        """Load items from the data file. A missing file yields no items."""
        if not self.path.exists():
            logger.debug(f"No searchables file at {self.path}")
            return []

        try:
            data = toml.load(self.path)
        except Exception:
            logger.exception(f"Failed to load searchables from {self.path}")
            return []

        items = []
        for key, spec in data.get("dialogs", {}).items():
            if not isinstance(spec, dict) or not is_valid_ref(spec.get("title")):
                logger.warning(f"Skipping malformed dialog '{key}': missing 'title' field")
                continue
            items.append(DialogRef(
                key=key,
                title_ref=spec["title"],
                icon_ref=spec.get("icon"),
                summary_ref=spec.get("summary"),
            ))

        for key, spec in data.get("screens", {}).items():
            screen = self._parse_screen(key, spec)
            if screen is not None:
                items.append(CategoryRef(screen))

        logger.debug(f"Loaded {len(items)} searchables from {self.path}")
        return items

    def _parse_screen(self, key: str, spec) -> ScreenDef | None:
        """Build a ScreenDef from a [screens.<key>] table, recursing into sub-screens."""
        if not isinstance(spec, dict) or not is_valid_ref(spec.get("title")):
            logger.warning(f"Skipping malformed screen '{key}': missing 'title' field")
            return None

        children = []
        for pref in spec.get("preferences", []):
            if not isinstance(pref, dict) or not pref.get("key"):
                logger.warning(f"Skipping malformed preference in screen '{key}'")
                continue
            children.append(PreferenceKey(
                key=pref["key"],
                title_ref=pref.get("title"),
                summary_ref=pref.get("summary"),
            ))

        for sub_key, sub_spec in spec.get("screens", {}).items():
            sub_screen = self._parse_screen(sub_key, sub_spec)
            if sub_screen is not None:
                children.append(sub_screen)

        return ScreenDef(
            key=key,
            title_ref=spec["title"],
            icon_ref=spec.get("icon"),
            summary_ref=spec.get("summary"),
            items=tuple(children),
        )
