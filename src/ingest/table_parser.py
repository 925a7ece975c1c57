"""Delimited-table strategy: CSV/TSV-like text with a header row."""

from __future__ import annotations

from src.records.dictionaries import SynonymKeyTable
from src.records.normalize import IncomeFormatError, coerce_dob, coerce_income
from src.records.schema import CanonicalField, IncomeRecord

DELIMITERS: tuple[str, ...] = (",", ";", "\t")


class TableStrategyError(ValueError):
    """Raised when the content does not look like a table with a recognized header."""


def _clean_cell(cell: str) -> str:
    return cell.strip().replace('"', "").strip()


def detect_delimiter(header_line: str) -> str | None:
    """Return the first of `,`, `;`, tab present in the header line."""

    for delimiter in DELIMITERS:
        if delimiter in header_line:
            return delimiter
    return None


def parse_table_records(content: str, *, synonyms: SynonymKeyTable) -> list[IncomeRecord]:
    """Extract records from delimited text whose first line is a header.

    Rows with an empty name or an unparsable income are dropped.

    Raises:
        TableStrategyError: If there is no data row, no delimiter in the header, or the name/income
            columns cannot be located.
    """

    lines = [line.strip() for line in content.strip().split("\n")]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        raise TableStrategyError("a header and at least one data row are required")

    delimiter = detect_delimiter(lines[0])
    if delimiter is None:
        raise TableStrategyError("no delimiter in header")

    header = [_clean_cell(cell) for cell in lines[0].lower().split(delimiter)]
    name_idx = synonyms.column_index(header, CanonicalField.name)
    income_idx = synonyms.column_index(header, CanonicalField.income)
    dob_idx = synonyms.column_index(header, CanonicalField.dob)
    if name_idx is None or income_idx is None:
        raise TableStrategyError("name/income columns not found in header")

    records: list[IncomeRecord] = []
    for line in lines[1:]:
        cells = [_clean_cell(cell) for cell in line.split(delimiter)]
        if len(cells) <= max(name_idx, income_idx):
            continue

        name = cells[name_idx]
        if not name:
            continue
        try:
            income = coerce_income(cells[income_idx])
        except IncomeFormatError:
            continue

        dob = cells[dob_idx] if dob_idx is not None and dob_idx < len(cells) else None
        records.append(IncomeRecord(name=name, income=income, dob=coerce_dob(dob or None)))
    return records
