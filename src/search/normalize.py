"""Name/query normalization for fuzzy search."""

from __future__ import annotations

import re

_SEPARATORS_RE = re.compile(r"[\s,.]+")


def fold_and_normalize(text: str) -> str:
    """Lower-case, fold `ё` -> `е`, trim.

    This is the only normalization applied; no other Unicode folding happens.
    """

    return (text or "").lower().replace("ё", "е").strip()


def tokenize(text: str) -> list[str]:
    """Split on runs of whitespace, commas and periods (so `"Иванов И.И."` -> 3 tokens)."""

    return [token for token in _SEPARATORS_RE.split(text) if token]
