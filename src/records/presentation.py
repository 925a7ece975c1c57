"""Presentation helpers: top earners and copy-ready text lines."""

from __future__ import annotations

from collections.abc import Iterable

from src.records.normalize import display_name
from src.records.schema import AnalyzedPerson, Dataset, IncomeRecord


def top_earners(dataset: Dataset, n: int) -> list[IncomeRecord]:
    """Return the `n` records with the highest income (ties keep dataset order).

    Raises:
        ValueError: If `n` is not positive.
    """

    if n <= 0:
        raise ValueError("n must be a positive integer")
    return sorted(dataset, key=lambda record: record.income, reverse=True)[:n]


def analyze_records(records: Iterable[IncomeRecord], *, org: str = "", inn: str = "") -> list[AnalyzedPerson]:
    return [
        AnalyzedPerson(name=display_name(record.name), org=org, inn=inn, dob=record.dob)
        for record in records
    ]


def name_with_dob(person: AnalyzedPerson) -> str:
    return f"{person.name} {person.dob}" if person.dob else person.name


def clipboard_line(person: AnalyzedPerson, *, reverse: bool = False) -> str:
    """`"<name> <org> <inn>"`, or `"<inn> <org> <name>"` when `reverse` is set; blanks are skipped."""

    parts = [person.name, person.org, person.inn]
    if reverse:
        parts.reverse()
    return " ".join(part.strip() for part in parts if part.strip())
