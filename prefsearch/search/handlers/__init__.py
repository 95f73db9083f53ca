"""
Search handlers - Pluggable query processors.

Each handler checks if it can handle a query and returns index entries.
"""

from .category_filter import CATEGORY_SENTINELS, CategoryFilterHandler, sentinel_for
from .relevance import RelevanceHandler, ScoreWeights

__all__ = [
    "CATEGORY_SENTINELS",
    "CategoryFilterHandler",
    "RelevanceHandler",
    "ScoreWeights",
    "sentinel_for",
]
