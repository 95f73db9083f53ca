# prefsearch Services Package
"""
Collaborators and controllers around the search index.

Services hold registries, string resolution and the query pipeline.
"""

from .pipeline import SearchPipeline, SearchState
from .sources import PluginRegistry, PreferenceRegistry
from .strings import StringCatalog

__all__ = ["SearchPipeline", "SearchState", "PluginRegistry", "PreferenceRegistry", "StringCatalog"]
