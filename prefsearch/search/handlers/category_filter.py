"""
Category Filter Handler - Reserved queries that list a whole category.

Triggers when the trimmed, lowercased query is exactly a sentinel:
  %plugins%  → every plugin entry
  %dialogs%  → every dialog entry

Entries come back unscored, in index order. Near misses ("%plugins",
"%plugins% pump") are ordinary text and go to relevance scoring.
"""

from ..entry import IndexEntry, SearchCategory

CATEGORY_SENTINELS = {
    "%plugins%": SearchCategory.PLUGIN,
    "%dialogs%": SearchCategory.DIALOG,
}


def sentinel_for(category: SearchCategory) -> str:
    """
    The sentinel query listing category.

    Raises:
        KeyError: category has no sentinel
    """
    for token, cat in CATEGORY_SENTINELS.items():
        if cat is category:
            return token
    raise KeyError(category)


class CategoryFilterHandler:
    """List every entry of one category via a sentinel query."""

    name = "category_filter"
    priority = 100

    def __init__(self, sentinels: dict = None):
        self.sentinels = sentinels or CATEGORY_SENTINELS

    def matches(self, query: str) -> bool:
        return query.strip().lower() in self.sentinels

    def get_results(self, query: str, index) -> list[IndexEntry]:
        category = self.sentinels.get(query.strip().lower())
        if category is None:
            return []
        return [entry for entry in index if entry.category is category]
