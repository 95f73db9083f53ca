"""
Relevance Handler - Free-text scoring over titles and summaries.

Every field is compared after lowercasing and diacritic folding, so
"ustava" finds "Ůstava". Bonuses are additive:

  localized title contains query   +100
  localized title starts with it    +50
  reference title contains query    +80
  localized summary contains query  +30
  reference summary contains query  +20

Entries scoring 0 are dropped. Equal scores keep index order.
"""

from dataclasses import dataclass

from ..entry import IndexEntry
from ..normalize import normalize


@dataclass(frozen=True)
class ScoreWeights:
    localized_title: int = 100
    localized_title_prefix: int = 50
    english_title: int = 80
    localized_summary: int = 30
    english_summary: int = 20


class RelevanceHandler:
    """Score every entry against the query and return matches best first."""

    name = "relevance"
    priority = 1000

    def __init__(self, weights: ScoreWeights = None):
        self.weights = weights or ScoreWeights()

    def matches(self, query: str) -> bool:
        return True

    def get_results(self, query: str, index) -> list[IndexEntry]:
        q = normalize(query)
        if not q:
            return []

        scored = [(entry, self.score(entry, q)) for entry in index]
        scored = [pair for pair in scored if pair[1] > 0]
        # sort() is stable: ties stay in index order
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return [entry for entry, _score in scored]

    def score(self, entry: IndexEntry, normalized_query: str) -> int:
        """Relevance of entry for an already-normalized query."""
        w = self.weights
        title, english_title, summary, english_summary = entry.search_fields
        score = 0

        if normalized_query in title:
            score += w.localized_title
            if title.startswith(normalized_query):
                score += w.localized_title_prefix

        if normalized_query in english_title:
            score += w.english_title

        if summary is not None and normalized_query in summary:
            score += w.localized_summary

        if english_summary is not None and normalized_query in english_summary:
            score += w.english_summary

        return score
