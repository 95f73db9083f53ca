"""
Shared test fixtures for the prefsearch test suite.

Provides real TOML files written to tmp_path (settings, string catalogs,
searchables), a manually driven scheduler for debounce tests, and a small
catalog of plugins, screens and settings.
"""

import itertools

import pytest
import toml

from prefsearch.search.builder import SearchIndexBuilder
from prefsearch.search.items import PluginInfo, PreferenceKey, ScreenDef
from prefsearch.search.providers import ProviderRegistry
from prefsearch.services.sources import PluginRegistry, PreferenceRegistry
from prefsearch.services.strings import StringCatalog


class ManualScheduler:
    """Scheduler whose timers only fire when the test says so."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.timers = {}
        self.removed = []

    def timeout_add(self, delay_ms, callback, *args):
        source_id = next(self._ids)
        self.timers[source_id] = (delay_ms, callback, args)
        return source_id

    def source_remove(self, source_id):
        self.removed.append(source_id)
        return self.timers.pop(source_id, None) is not None

    def pending(self):
        return len(self.timers)

    def fire_all(self):
        timers = list(self.timers.values())
        self.timers.clear()
        for _delay, callback, args in timers:
            callback(*args)


EN_STRINGS = {
    "oref": "OpenAPS SMB",
    "oref_desc": "Most recent algorithm",
    "loop": "Loop",
    "hidden": "Hidden plugin",
    "oref_screen": "OpenAPS settings",
    "oref_advanced": "Advanced settings",
    "max_iob": "Maximum IOB",
    "max_iob_summary": "Limit for insulin on board",
    "smb_enabled": "Enable SMB",
    "general": "General",
    "units": "Units",
    "orphan": "Orphan setting",
}

CS_STRINGS = {
    "oref_screen": "Nastavení OpenAPS",
    "oref_advanced": "Pokročilé nastavení",
    "max_iob": "Maximální IOB",
    "general": "Obecné",
    "units": "Jednotky",
}


@pytest.fixture
def strings():
    """Catalog with English as reference and Czech as the current locale."""
    return StringCatalog({"en": EN_STRINGS, "cs": CS_STRINGS}, locale="cs", reference_locale="en")


@pytest.fixture
def oref_plugin():
    """Plugin with a two-level configuration screen."""
    advanced = ScreenDef(
        key="oref_advanced",
        title_ref="oref_advanced",
        items=(PreferenceKey("smb_enabled", "smb_enabled"),),
    )
    root = ScreenDef(
        key="oref_screen",
        title_ref="oref_screen",
        icon_ref="ic_oref",
        items=(PreferenceKey("max_iob", "max_iob", "max_iob_summary"), advanced),
    )
    return PluginInfo(
        key="OpenAPSSMBPlugin",
        title_ref="oref",
        summary_ref="oref_desc",
        icon_ref="ic_oref",
        plugin_types=("aps",),
        root_screen=root,
    )


@pytest.fixture
def plugins(oref_plugin):
    return PluginRegistry([
        oref_plugin,
        PluginInfo(key="LoopPlugin", title_ref="loop", plugin_types=("loop",)),
        PluginInfo(key="HiddenPlugin", title_ref="hidden", plugin_types=("general",),
                   hidden_in=frozenset({"general"})),
    ])


@pytest.fixture
def preferences():
    return PreferenceRegistry([
        PreferenceKey("max_iob", "max_iob", "max_iob_summary"),
        PreferenceKey("smb_enabled", "smb_enabled"),
        PreferenceKey("units", "units"),
        PreferenceKey("orphan", "orphan"),
        PreferenceKey("untitled", None),
    ])


@pytest.fixture
def make_builder(strings):
    """Factory for builders; unspecified collaborators are empty."""

    def _make(plugins=None, providers=(), preferences=None, catalog=None):
        return SearchIndexBuilder(
            plugins if plugins is not None else PluginRegistry(),
            ProviderRegistry(providers),
            preferences if preferences is not None else PreferenceRegistry(),
            catalog if catalog is not None else strings,
        )

    return _make


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file overriding the debounce."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "search": {"debounce_ms": 150},
        "strings": {"locale": "cs"},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


@pytest.fixture
def tmp_strings_dir(tmp_path):
    """Create a directory with en.toml and cs.toml catalogs."""
    directory = tmp_path / "strings"
    directory.mkdir()
    (directory / "en.toml").write_text(toml.dumps({"strings": EN_STRINGS}))
    (directory / "cs.toml").write_text(toml.dumps({"strings": CS_STRINGS}))
    return directory


@pytest.fixture
def tmp_searchables(tmp_path):
    """Create a real searchables TOML file with dialogs and a nested screen."""
    path = tmp_path / "searchables.toml"
    data = {
        "dialogs": {
            "about": {"title": "nav_about", "icon": "ic_info", "summary": "nav_about_desc"},
            "broken": {"icon": "ic_missing_title"},
        },
        "screens": {
            "general": {
                "title": "general",
                "icon": "ic_settings",
                "preferences": [
                    {"key": "units", "title": "units"},
                    {"title": "no key"},
                ],
                "screens": {
                    "display": {
                        "title": "display",
                        "preferences": [{"key": "dark_mode", "title": "dark_mode"}],
                    },
                },
            },
        },
    }
    path.write_text(toml.dumps(data))
    return path
