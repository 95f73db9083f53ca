"""
Searchable Items - Everything the settings search can find.

Four kinds of items feed the index:
  - PluginRef:     an enabled feature (plugin) of the application
  - CategoryRef:   a configuration screen, built-in or plugin-owned
  - PreferenceRef: one concrete setting
  - DialogRef:     a navigable screen or dialog without a persisted setting

The collaborator shapes they are built from (PluginInfo, ScreenDef,
PreferenceKey) live here too. Titles, summaries and icons are string
references resolved later by a StringCatalog.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


def is_valid_ref(ref) -> bool:
    """A reference is usable when it is a non-empty string."""
    return isinstance(ref, str) and ref != ""


@dataclass(frozen=True)
class PreferenceKey:
    """A single setting known to the preference registry."""
    key: str
    title_ref: Optional[str] = None
    summary_ref: Optional[str] = None


@dataclass(frozen=True)
class ScreenDef:
    """
    A configuration screen.

    items holds the screen's children in display order: nested ScreenDefs
    and PreferenceKeys. Anything else is ignored when walking the tree.
    """
    key: str
    title_ref: Optional[str] = None
    icon_ref: Optional[str] = None
    summary_ref: Optional[str] = None
    items: tuple = ()


@dataclass(eq=False)
class PluginInfo:
    """
    Plugin handle as listed by the plugin registry.

    Compared by identity, since enabled flips at runtime.
    """
    key: str
    title_ref: Optional[str] = None
    summary_ref: Optional[str] = None
    icon_ref: Optional[str] = None
    enabled: bool = True
    plugin_types: tuple[str, ...] = ("general",)
    hidden_in: frozenset = frozenset()
    root_screen: Optional[ScreenDef] = None

    def is_visible(self, plugin_type: str) -> bool:
        return plugin_type in self.plugin_types and plugin_type not in self.hidden_in

    def is_visible_anywhere(self) -> bool:
        return any(self.is_visible(t) for t in self.plugin_types)


@dataclass(frozen=True)
class PluginRef:
    """A plugin, found by its name. Selecting it opens the plugin."""
    plugin: PluginInfo

    @property
    def key(self) -> str:
        return self.plugin.key

    @property
    def title_ref(self) -> Optional[str]:
        return self.plugin.title_ref

    @property
    def summary_ref(self) -> Optional[str]:
        return self.plugin.summary_ref

    @property
    def icon_ref(self) -> Optional[str]:
        return self.plugin.icon_ref

    @property
    def owner_plugin(self) -> PluginInfo:
        return self.plugin


@dataclass(frozen=True)
class CategoryRef:
    """A configuration screen. Selecting it opens the screen."""
    screen: ScreenDef
    owner_plugin: Optional[PluginInfo] = None
    inherited_icon_ref: Optional[str] = None

    @property
    def key(self) -> str:
        return self.screen.key

    @property
    def title_ref(self) -> Optional[str]:
        return self.screen.title_ref

    @property
    def summary_ref(self) -> Optional[str]:
        return self.screen.summary_ref

    @property
    def icon_ref(self) -> Optional[str]:
        return self.screen.icon_ref or self.inherited_icon_ref

    @property
    def children(self) -> tuple:
        return self.screen.items


@dataclass(frozen=True)
class PreferenceRef:
    """
    One setting. Selecting it opens parent_screen_key and highlights the
    setting; parent_screen_key is None when no screen lists the key.
    """
    preference: PreferenceKey
    parent_screen_key: Optional[str] = None
    inherited_icon_ref: Optional[str] = None
    owner_plugin: Optional[PluginInfo] = None

    @property
    def key(self) -> str:
        return self.preference.key

    @property
    def title_ref(self) -> Optional[str]:
        return self.preference.title_ref

    @property
    def summary_ref(self) -> Optional[str]:
        return self.preference.summary_ref

    @property
    def icon_ref(self) -> Optional[str]:
        return self.inherited_icon_ref


@dataclass(frozen=True)
class DialogRef:
    """A dialog or action screen reachable from search."""
    key: str
    title_ref: Optional[str] = None
    icon_ref: Optional[str] = None
    summary_ref: Optional[str] = None
    owner_plugin: Optional[PluginInfo] = field(default=None, init=False)


SearchableItem = Union[PluginRef, CategoryRef, PreferenceRef, DialogRef]
