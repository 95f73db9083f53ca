"""
In-memory registries the index is built from.

PluginRegistry lists the application's plugins and announces enable /
disable changes; PreferenceRegistry is the flat list of every setting key.
Neither knows about screens: which screen holds a setting is worked out
by the index builder.
"""

from gi.repository import GObject
from loguru import logger

from ..search.items import PluginInfo, PreferenceKey, ScreenDef


class PluginRegistry(GObject.Object):
    """
    Registry of plugins in registration order.

    Signals:
        changed: Emitted when a plugin is added, removed, enabled or disabled
    """

    __gtype_name__ = "PrefsearchPluginRegistry"

    __gsignals__ = {
        "changed": (GObject.SignalFlags.RUN_FIRST, None, ()),
    }

    def __init__(self, plugins=()):
        super().__init__()
        self._plugins: list[PluginInfo] = []
        for plugin in plugins:
            self._add(plugin)

    def _add(self, plugin: PluginInfo) -> bool:
        if self.get(plugin.key) is not None:
            logger.warning(f"Plugin '{plugin.key}' already registered, ignoring duplicate")
            return False
        self._plugins.append(plugin)
        return True

    def register(self, plugin: PluginInfo) -> None:
        if self._add(plugin):
            self.emit("changed")

    def unregister(self, key: str) -> None:
        before = len(self._plugins)
        self._plugins = [p for p in self._plugins if p.key != key]
        if len(self._plugins) != before:
            self.emit("changed")

    def get(self, key: str) -> PluginInfo | None:
        for plugin in self._plugins:
            if plugin.key == key:
                return plugin
        return None

    def list_plugins(self) -> list[PluginInfo]:
        return list(self._plugins)

    def set_enabled(self, key: str, enabled: bool) -> None:
        """
        Enable or disable a plugin.

        Raises:
            KeyError: No plugin with this key
        """
        plugin = self.get(key)
        if plugin is None:
            raise KeyError(key)
        if plugin.enabled == enabled:
            return
        plugin.enabled = enabled
        logger.debug(f"Plugin '{key}' {'enabled' if enabled else 'disabled'}")
        self.emit("changed")


class PreferenceRegistry:
    """Every known setting key, first registration wins."""

    def __init__(self, keys=()):
        self._keys: dict[str, PreferenceKey] = {}
        self.register(*keys)

    def register(self, *keys: PreferenceKey) -> None:
        for pref in keys:
            self._keys.setdefault(pref.key, pref)

    def register_screen(self, screen: ScreenDef) -> None:
        """Register every setting listed on screen and its sub-screens."""
        pending = [screen]
        visited = set()
        while pending:
            current = pending.pop(0)
            if current.key in visited:
                continue
            visited.add(current.key)
            for child in current.items:
                if isinstance(child, PreferenceKey):
                    self.register(child)
                elif isinstance(child, ScreenDef):
                    pending.append(child)

    def all_preference_keys(self) -> list[PreferenceKey]:
        return list(self._keys.values())
