"""Field value coercion shared by all ingestion strategies."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from src.records.dictionaries import SynonymKeyTable
from src.records.schema import NULL_SENTINEL, CanonicalField

_WHITESPACE_RE = re.compile(r"\s+")
_THOUSANDS_RE = re.compile(r"[\s,]+")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class IncomeFormatError(ValueError):
    """Raised when an income value cannot be read as a finite number."""


def coerce_income(raw: Any, *, decimal_comma: bool = False) -> float:
    """Parse an income value written in a locale-ambiguous way.

    Whitespace is always removed. With `decimal_comma=False` commas are treated as thousands
    separators and dropped (`"1,250,000.50"`); with `decimal_comma=True` the first comma becomes the
    decimal point (`"50 000,75"`). The leading number is read and any trailing text (a currency or
    unit such as `"руб."` or `"USD"`) is ignored.

    Raises:
        IncomeFormatError: If the cleaned text does not start with a finite decimal number.
    """

    if isinstance(raw, bool):
        raise IncomeFormatError("boolean is not an income")
    if isinstance(raw, int | float):
        value = float(raw)
    else:
        text = str(raw)
        if decimal_comma:
            text = _WHITESPACE_RE.sub("", text).replace(",", ".", 1)
        else:
            text = _THOUSANDS_RE.sub("", text)
        match = _NUMBER_RE.match(text)
        if not match:
            raise IncomeFormatError(f"not a number: {raw!r}")
        value = float(match.group(0))

    if not math.isfinite(value):
        raise IncomeFormatError(f"not a finite number: {raw!r}")
    return value


def coerce_dob(raw: str | None) -> str | None:
    """Return the date of birth unchanged, except the `"null"` sentinel (any casing) -> `None`."""

    if raw is None or raw.lower() == NULL_SENTINEL:
        return None
    return raw


def display_name(raw: str) -> str:
    """Lower-case a name, then capitalize the first letter of every space-separated word.

    Presentation only; matching and indexing never use this form.
    """

    return " ".join(word[:1].upper() + word[1:] for word in raw.lower().split(" "))


def find_value_by_alias(
        fields: Mapping[str, Any],
        field: CanonicalField,
        synonyms: SynonymKeyTable,
) -> Any | None:
    """Look up a canonical field in a field bag by its aliases (case-insensitive keys).

    Aliases are tried in table order; the first one present wins. When several keys differ only by
    case, the last one in the bag is used.
    """

    lowered = {str(key).lower(): key for key in fields}
    for alias in synonyms.aliases(field):
        key = lowered.get(alias)
        if key is not None:
            return fields[key]
    return None
