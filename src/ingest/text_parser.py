"""Unstructured-text strategy (terminal fallback).

Two heuristics, chosen once per input:
    - key-value blocks (`ФИО: ...`, `Доход: ...`) separated by lines of three or more dashes;
    - one `<name> <income>` record per line, with the date of birth optionally found on a
      neighbouring line or inside the name itself.
"""

from __future__ import annotations

import re

from src.records.dictionaries import SynonymKeyTable
from src.records.normalize import IncomeFormatError, coerce_dob, coerce_income, find_value_by_alias
from src.records.schema import CanonicalField, IncomeRecord

_BLOCK_SEPARATOR_RE = re.compile(r"^\s*-{3,}\s*$", flags=re.MULTILINE)
_ORDINAL_PREFIX_RE = re.compile(r"^\d+\.\s*")
_DATE_RE = re.compile(r"\b(\d{1,2}[./-]\d{1,2}[./-]\d{4})\b")
_NAME_INCOME_RE = re.compile(r"^(.*[a-zA-Zа-яА-ЯёЁ].*?)\s+([\d,.\s]+)$")


def split_blocks(content: str) -> list[str]:
    """Split content on lines made only of dashes (3+); blank blocks are dropped."""

    blocks = (block.strip() for block in _BLOCK_SEPARATOR_RE.split(content))
    return [block for block in blocks if block]


def _normalize_key(raw_key: str) -> str:
    key = _ORDINAL_PREFIX_RE.sub("", raw_key.strip())
    return key.lower().replace("_", " ")


def parse_block_fields(block: str) -> dict[str, str]:
    """Collect `key: value` pairs of a block (split at the first colon; later keys win)."""

    fields: dict[str, str] = {}
    for line in block.split("\n"):
        line = line.strip()
        key, sep, value = line.partition(":")
        if not sep:
            continue
        fields[_normalize_key(key)] = value.strip()
    return fields


def _record_from_block(block: str, synonyms: SynonymKeyTable) -> IncomeRecord | None:
    fields = parse_block_fields(block)
    name = find_value_by_alias(fields, CanonicalField.name, synonyms)
    income_raw = find_value_by_alias(fields, CanonicalField.income, synonyms)
    dob = find_value_by_alias(fields, CanonicalField.dob, synonyms)

    if not name or not income_raw:
        return None
    try:
        income = coerce_income(income_raw, decimal_comma=True)
    except IncomeFormatError:
        return None

    return IncomeRecord(name=name, income=income, dob=coerce_dob(dob or None))


def parse_key_value_records(blocks: list[str], *, synonyms: SynonymKeyTable) -> list[IncomeRecord]:
    """Build one record per block that resolves both a name and a parsable income."""

    records: list[IncomeRecord] = []
    for block in blocks:
        record = _record_from_block(block, synonyms)
        if record is not None:
            records.append(record)
    return records


def _neighbour_date(line: str) -> str | None:
    # A neighbouring line that is itself a record never donates its date.
    if _NAME_INCOME_RE.match(line):
        return None
    match = _DATE_RE.search(line)
    return match.group(1) if match else None


def parse_line_records(content: str) -> list[IncomeRecord]:
    """Extract `<name> <income>` records line by line, ignoring lines that contain a colon."""

    lines = [line.strip() for line in content.split("\n")]
    lines = [line for line in lines if line and ":" not in line]

    records: list[IncomeRecord] = []
    for idx, line in enumerate(lines):
        match = _NAME_INCOME_RE.match(line)
        if not match:
            continue

        name = match.group(1).strip()
        try:
            income = coerce_income(match.group(2))
        except IncomeFormatError:
            continue
        if not name:
            continue

        dob = None
        if idx > 0:
            dob = _neighbour_date(lines[idx - 1])
        if dob is None and idx < len(lines) - 1:
            dob = _neighbour_date(lines[idx + 1])
        if dob is None:
            embedded = _DATE_RE.search(name)
            if embedded:
                dob = embedded.group(1)
                name = _DATE_RE.sub("", name, count=1).strip()

        records.append(IncomeRecord(name=name, income=income, dob=coerce_dob(dob)))
    return records


def parse_text_records(content: str, *, synonyms: SynonymKeyTable) -> list[IncomeRecord]:
    """Run the key-value heuristic if the first block has a colon, otherwise the line heuristic.

    The key-value result is final even when it is empty.
    """

    blocks = split_blocks(content)
    if blocks and ":" in blocks[0]:
        return parse_key_value_records(blocks, synonyms=synonyms)
    return parse_line_records(content)
