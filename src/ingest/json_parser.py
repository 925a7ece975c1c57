"""Structured-array strategy: a JSON array of objects."""

from __future__ import annotations

import json
from typing import Any

from src.records.dictionaries import SynonymKeyTable
from src.records.normalize import IncomeFormatError, coerce_dob, coerce_income, find_value_by_alias
from src.records.schema import CanonicalField, IncomeRecord


class JSONStrategyError(ValueError):
    """Raised when the content is not a JSON array (the strategy does not apply)."""


def _record_from_item(item: dict[str, Any], synonyms: SynonymKeyTable) -> IncomeRecord | None:
    name = find_value_by_alias(item, CanonicalField.name, synonyms)
    income = find_value_by_alias(item, CanonicalField.income, synonyms)
    dob = find_value_by_alias(item, CanonicalField.dob, synonyms)

    if not isinstance(name, str) or not name.strip():
        return None
    if isinstance(income, bool) or not isinstance(income, int | float | str):
        return None

    try:
        value = coerce_income(income)
    except IncomeFormatError:
        return None

    return IncomeRecord(
        name=name,
        income=value,
        dob=coerce_dob(dob) if isinstance(dob, str) else None,
    )


def parse_json_records(content: str, *, synonyms: SynonymKeyTable) -> list[IncomeRecord]:
    """Extract records from a JSON array of field bags.

    Elements that are not objects, lack a name, or carry an unparsable income are skipped. A name
    made only of whitespace counts as missing, since `IncomeRecord` requires a non-blank name.

    Raises:
        JSONStrategyError: If the content is not valid JSON or not a top-level array.
    """

    try:
        data = json.loads(content)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise JSONStrategyError("content is not valid JSON") from exc

    if not isinstance(data, list):
        raise JSONStrategyError("top-level JSON value is not an array")

    records: list[IncomeRecord] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        record = _record_from_item(item, synonyms)
        if record is not None:
            records.append(record)
    return records
