"""Tests for the record model, alias table and value coercion."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.records.dictionaries import DEFAULT_SYNONYMS, SynonymKeyTable
from src.records.normalize import (
    IncomeFormatError,
    coerce_dob,
    coerce_income,
    display_name,
    find_value_by_alias,
)
from src.records.schema import CanonicalField, IncomeRecord


def test_record_normalizes_null_dob() -> None:
    assert IncomeRecord(name="Иванов", income=1, dob="NULL").dob is None
    assert IncomeRecord(name="Иванов", income=1, dob="01.02.1980").dob == "01.02.1980"


def test_record_rejects_empty_name_and_non_finite_income() -> None:
    with pytest.raises(ValueError):
        IncomeRecord(name="  ", income=1)
    with pytest.raises(ValueError):
        IncomeRecord(name="Иванов", income=float("inf"))


def test_record_is_immutable_value() -> None:
    record = IncomeRecord(name="Иванов", income=100)
    assert record == IncomeRecord(name="Иванов", income=100.0)
    with pytest.raises(ValueError):
        record.income = 5  # type: ignore[misc]


def test_coerce_income_thousands_separators() -> None:
    assert coerce_income("1 250 000") == 1_250_000
    assert coerce_income("1,250,000.50") == 1_250_000.5
    assert coerce_income(42) == 42.0


def test_coerce_income_decimal_comma() -> None:
    assert coerce_income("50 000,75", decimal_comma=True) == 50_000.75
    assert coerce_income("1200", decimal_comma=True) == 1200


def test_coerce_income_reads_leading_number() -> None:
    assert coerce_income("50000 USD") == 50_000
    assert coerce_income("1 250 000,50 руб.", decimal_comma=True) == 1_250_000.5
    assert coerce_income("12abc") == 12
    assert coerce_income("1.2.3") == 1.2


@pytest.mark.parametrize("raw", ["", "abc", "руб. 100", "inf", "nan", "1e999", True])
def test_coerce_income_rejects_garbage(raw: object) -> None:
    with pytest.raises(IncomeFormatError):
        coerce_income(raw)


def test_coerce_dob_null_sentinel() -> None:
    assert coerce_dob("null") is None
    assert coerce_dob("Null") is None
    assert coerce_dob(None) is None
    assert coerce_dob("1980-02-01") == "1980-02-01"


def test_display_name() -> None:
    assert display_name("ИВАНОВ иван петрович") == "Иванов Иван Петрович"
    assert display_name("o'neil  john") == "O'neil  John"


def test_find_value_by_alias_is_case_insensitive_and_ordered() -> None:
    fields = {"ФИО": "Петров Петр", "Name": "Petrov", "Доход": 10}
    assert find_value_by_alias(fields, CanonicalField.name, DEFAULT_SYNONYMS) == "Petrov"
    assert find_value_by_alias(fields, CanonicalField.income, DEFAULT_SYNONYMS) == 10
    assert find_value_by_alias(fields, CanonicalField.dob, DEFAULT_SYNONYMS) is None


def test_synonym_table_from_json(tmp_path: Path) -> None:
    path = tmp_path / "aliases.json"
    path.write_text(
        json.dumps({"name": [" Person ", "person"], "income": ["Pay"], "dob": ["born"]}),
        encoding="utf-8",
    )
    table = SynonymKeyTable.from_json(path)
    assert table.aliases(CanonicalField.name) == ("person",)
    assert table.column_index(["born", "pay", "person"], CanonicalField.income) == 1


def test_synonym_table_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "aliases.json"
    path.write_text(json.dumps({"name": [], "income": ["pay"], "dob": ["born"]}), encoding="utf-8")
    with pytest.raises(RuntimeError):
        SynonymKeyTable.from_json(path)
    with pytest.raises(RuntimeError):
        SynonymKeyTable.from_json(tmp_path / "missing.json")
