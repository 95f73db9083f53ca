"""
prefsearch - Wiring of the settings search.

Creates the registries, string catalog, index builder and query pipeline
and connects the invalidation signals, so a host application only has to
register its plugins and settings:

    search = create_search(plugins=[...], preferences=[...])
    search.pipeline.activate()
    search.pipeline.change_query("alarm")
"""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .search.builder import SearchIndexBuilder
from .search.items import CategoryRef
from .search.providers import ProviderRegistry, TomlSearchableProvider
from .services.pipeline import SearchPipeline
from .services.sources import PluginRegistry, PreferenceRegistry
from .services.strings import StringCatalog
from .utils.helpers import bind_invalidation, load_settings

BUILTIN_SEARCHABLES_PATH = Path(__file__).parent / "data" / "searchables.toml"


@dataclass
class SettingsSearch:
    """The wired-up search and the collaborators it was built from."""
    settings: dict
    strings: StringCatalog
    plugins: PluginRegistry
    preferences: PreferenceRegistry
    providers: ProviderRegistry
    builder: SearchIndexBuilder
    pipeline: SearchPipeline

    def close(self) -> None:
        self.pipeline.close()


def create_search(
    plugins=(),
    preferences=(),
    providers=(),
    settings_path=None,
    include_builtin: bool = True,
    scheduler=None,
) -> SettingsSearch:
    """
    Build a ready-to-use settings search.

    Args:
        plugins: PluginInfo objects to register
        preferences: PreferenceKey objects to register
        providers: extra SearchableProviders, consulted after the built-in one
        settings_path: settings TOML file, defaults to the bundled one
        include_builtin: register the built-in screens and dialogs
        scheduler: timer scheduler for the debounce, defaults to the GLib main loop

    Returns:
        SettingsSearch whose index is invalidated automatically when a
        plugin is toggled or the locale changes
    """
    settings = load_settings(settings_path)
    strings = StringCatalog.from_settings(settings)

    plugin_registry = PluginRegistry(plugins)
    preference_registry = PreferenceRegistry(preferences)

    provider_registry = ProviderRegistry()
    if include_builtin:
        builtin = TomlSearchableProvider(BUILTIN_SEARCHABLES_PATH)
        provider_registry.register(builtin)
        # Built-in screens declare their own settings
        for item in builtin.get_searchable_items():
            if isinstance(item, CategoryRef):
                preference_registry.register_screen(item.screen)
    for provider in providers:
        provider_registry.register(provider)

    builder = SearchIndexBuilder(plugin_registry, provider_registry, preference_registry, strings)
    pipeline = SearchPipeline.from_settings(builder, settings, scheduler=scheduler)
    bind_invalidation(pipeline, plugin_registry, strings)

    logger.debug(
        f"Settings search ready: {len(plugin_registry.list_plugins())} plugins, "
        f"{len(provider_registry)} providers, locale '{strings.locale}'"
    )
    return SettingsSearch(
        settings=settings,
        strings=strings,
        plugins=plugin_registry,
        preferences=preference_registry,
        providers=provider_registry,
        builder=builder,
        pipeline=pipeline,
    )
