"""
Tests for error handling across the index, providers and pipeline.

Verifies graceful degradation when things go wrong:
- Unresolvable or broken string references
- Malformed data files
- Failing listeners and searches
"""

from unittest.mock import MagicMock

import pytest

from prefsearch.search.items import CategoryRef, DialogRef, PluginInfo, PreferenceKey, ScreenDef
from prefsearch.search.providers import StaticSearchableProvider, TomlSearchableProvider
from prefsearch.services.pipeline import SearchPipeline
from prefsearch.services.sources import PluginRegistry, PreferenceRegistry


class TestResolutionFailures:
    """A bad reference costs one field, never the build."""

    def test_failure_only_affects_that_field(self, make_builder):
        resolver = MagicMock()
        resolver.resolve.side_effect = lambda ref: {"about": "O aplikaci"}[ref]
        resolver.resolve_reference.side_effect = lambda ref: {"about": "About", "about_desc": "Info"}[ref]
        provider = StaticSearchableProvider([DialogRef("about", "about", summary_ref="about_desc")])

        entry = make_builder(providers=[provider], catalog=resolver).get_index()[0]
        assert entry.localized_title == "O aplikaci"
        assert entry.english_title == "About"
        assert entry.localized_summary == ""
        assert entry.english_summary == "Info"

    def test_broken_entries_still_findable_by_other_fields(self, make_builder):
        resolver = MagicMock()
        resolver.resolve.side_effect = KeyError("missing")
        resolver.resolve_reference.return_value = "Pump settings"
        provider = StaticSearchableProvider([CategoryRef(ScreenDef("pump", "pump"))])

        results = make_builder(providers=[provider], catalog=resolver).search("pump")
        assert [e.key for e in results] == ["pump"]

    def test_resolver_never_called_for_missing_refs(self, make_builder):
        resolver = MagicMock()
        provider = StaticSearchableProvider([DialogRef("about", "about")])
        make_builder(providers=[provider], catalog=resolver).get_index()
        resolver.resolve.assert_called_once_with("about")
        resolver.resolve_reference.assert_called_once_with("about")


class TestNormalConditions:
    """Duplicates, empty indexes and odd queries are not errors."""

    def test_duplicate_plugins_keep_first(self):
        first = PluginInfo("P", "first")
        registry = PluginRegistry([first, PluginInfo("P", "second")])
        assert registry.list_plugins() == [first]

    def test_duplicate_preferences_keep_first(self):
        first = PreferenceKey("k", "first")
        registry = PreferenceRegistry([first, PreferenceKey("k", "second")])
        assert registry.all_preference_keys() == [first]

    def test_search_on_empty_index(self, make_builder):
        assert make_builder().search("pump") == []

    def test_malformed_sentinel_falls_through(self, make_builder):
        provider = StaticSearchableProvider([DialogRef("plugins", "plugins_title")])
        catalog = MagicMock()
        catalog.resolve.return_value = "%plugins list"
        catalog.resolve_reference.return_value = "%plugins list"
        results = make_builder(providers=[provider], catalog=catalog).search("%plugins")
        assert [e.key for e in results] == ["plugins"]

    def test_set_enabled_unknown_plugin(self):
        with pytest.raises(KeyError, match="missing"):
            PluginRegistry().set_enabled("missing", True)


class TestMalformedData:
    """Data files with bad entries load what they can."""

    def test_screen_without_title_skipped(self, tmp_path):
        path = tmp_path / "searchables.toml"
        path.write_text(
            '[screens.good]\ntitle = "good"\n\n'
            '[screens.bad]\nicon = "ic_bad"\n'
        )
        items = TomlSearchableProvider(path).get_searchable_items()
        assert [i.key for i in items] == ["good"]

    def test_dialog_that_is_not_a_table_skipped(self, tmp_path):
        path = tmp_path / "searchables.toml"
        path.write_text('[dialogs]\nabout = "not a table"\n')
        assert TomlSearchableProvider(path).get_searchable_items() == []


class TestPipelineFailures:
    """Listener and search errors don't break the pipeline."""

    def test_failing_listener_does_not_block_state(self, scheduler):
        builder = MagicMock()
        builder.search.return_value = ["hit"]
        pipeline = SearchPipeline(builder, scheduler)
        pipeline.connect("changed", MagicMock(side_effect=RuntimeError("listener bug")))
        pipeline.change_query("pump")
        scheduler.fire_all()
        assert pipeline.state.results == ["hit"]

    def test_pipeline_recovers_after_failed_search(self, scheduler):
        builder = MagicMock()
        builder.search.side_effect = [RuntimeError("boom"), ["hit"]]
        pipeline = SearchPipeline(builder, scheduler)
        pipeline.change_query("pump")
        scheduler.fire_all()
        assert pipeline.state.results == []
        pipeline.change_query("pumpa")
        scheduler.fire_all()
        assert pipeline.state.results == ["hit"]
