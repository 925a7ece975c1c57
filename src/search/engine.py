"""Fuzzy name search.

A record matches when every query token matches at least one token of the record name. A token pair
matches by prefix, then substring, then (for query tokens longer than 2 characters) by bounded edit
distance. Results are a boolean filter; no scores are computed and input order is preserved.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.records.schema import IncomeRecord
from src.search.levenshtein import levenshtein_distance
from src.search.normalize import fold_and_normalize, tokenize

# Fuzzy matching is disabled for query tokens of this length or shorter (initials, fragments).
MIN_FUZZY_TOKEN_LENGTH = 3
# Token pairs whose lengths differ by more than this are never compared by edit distance.
MAX_LENGTH_DIFFERENCE = 3
# Query tokens longer than this may differ by MAX_EDITS_LONG edits, shorter ones by MAX_EDITS_SHORT.
LONG_TOKEN_LENGTH = 5
MAX_EDITS_LONG = 2
MAX_EDITS_SHORT = 1


def allowed_edits(query_token: str) -> int:
    return MAX_EDITS_LONG if len(query_token) > LONG_TOKEN_LENGTH else MAX_EDITS_SHORT


def token_matches(query_token: str, name_token: str) -> bool:
    """Whether a single (normalized) query token matches a single name token."""

    if name_token.startswith(query_token):
        return True
    if query_token in name_token:
        return True
    if len(query_token) < MIN_FUZZY_TOKEN_LENGTH:
        return False
    if abs(len(name_token) - len(query_token)) > MAX_LENGTH_DIFFERENCE:
        return False
    return levenshtein_distance(query_token, name_token) <= allowed_edits(query_token)


def name_matches(query_tokens: Sequence[str], name: str) -> bool:
    """AND across query tokens, OR across name tokens."""

    name_tokens = tokenize(fold_and_normalize(name))
    return all(
        any(token_matches(query_token, name_token) for name_token in name_tokens)
        for query_token in query_tokens
    )


def search(query: str, dataset: Iterable[IncomeRecord]) -> list[IncomeRecord]:
    """Return the records whose name matches the query, in dataset order.

    An empty query (no tokens after normalization) matches nothing.
    """

    query_tokens = tokenize(fold_and_normalize(query))
    if not query_tokens:
        return []
    return [record for record in dataset if name_matches(query_tokens, record.name)]
