# prefsearch Utilities Package
"""
Shared utility functions and helpers for prefsearch.
"""

from .helpers import bind_invalidation, load_settings
from .scheduler import GLibScheduler

__all__ = ["bind_invalidation", "load_settings", "GLibScheduler"]
