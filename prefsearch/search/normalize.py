"""
Query normalization shared by the index and the ranker.

"Ůstava", "ustava" and " ÚSTAVA " all normalize to "ustava".
"""

import unicodedata


def fold_diacritics(text: str) -> str:
    """Strip combining marks after canonical decomposition (ů -> u, é -> e)."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.category(ch).startswith("M"))


def normalize(text: str) -> str:
    """Trim, lowercase without locale rules, then fold diacritics."""
    return fold_diacritics(text.strip().lower())
