"""Edit distance."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance (unit cost insert/delete/substitute)."""

    return Levenshtein.distance(a, b)
