"""Tests for the fuzzy name search filter."""

from __future__ import annotations

from src.records.schema import IncomeRecord
from src.search.engine import search, token_matches


def _rec(name: str, income: float = 1000) -> IncomeRecord:
    return IncomeRecord(name=name, income=income)


def test_prefix_match() -> None:
    dataset = [_rec("Иванов Иван")]
    assert search("ив", dataset) == dataset


def test_substring_match() -> None:
    dataset = [_rec("Константинопольский Петр")]
    assert search("тинопол", dataset) == dataset


def test_fuzzy_match_long_token_allows_two_edits() -> None:
    dataset = [_rec("сидорвоа")]
    assert search("сидорова", dataset) == dataset


def test_fuzzy_match_short_token_allows_one_edit() -> None:
    assert token_matches("петра", "петря")
    assert not token_matches("петра", "пешря")


def test_fuzzy_disabled_for_two_letter_tokens() -> None:
    assert search("ив", [_rec("Сидоров")]) == []
    assert not token_matches("ва", "вы")


def test_fuzzy_skipped_when_lengths_differ_too_much() -> None:
    assert not token_matches("смит", "смирновская")
    assert not token_matches("иванова", "ивнвааааааа")


def test_all_query_tokens_must_match_any_name_token() -> None:
    dataset = [_rec("Петров Иван Сергеевич"), _rec("Петров Алексей"), _rec("Иванов Петр")]
    assert search("петров и", dataset) == [dataset[0], dataset[2]]
    assert search("и петров", dataset) == [dataset[0], dataset[2]]
    assert search("петров ал", dataset) == [dataset[1]]


def test_initials_with_periods() -> None:
    dataset = [_rec("Сидоров Иван Петрович"), _rec("Сидоров Олег Иванович")]
    assert search("Сидоров И.П.", dataset) == [dataset[0]]


def test_yo_fold_applies_to_query_and_name() -> None:
    dataset = [_rec("Семёнов Артём")]
    assert search("семенов", dataset) == dataset
    assert search("АРТЁМ", dataset) == dataset


def test_empty_query_matches_nothing() -> None:
    dataset = [_rec("Иванов Иван")]
    assert search("", dataset) == []
    assert search("  , . ", dataset) == []


def test_preserves_dataset_order_and_is_deterministic() -> None:
    dataset = [_rec("Ивлев А", 1), _rec("Петров Б", 2), _rec("Иванов В", 3), _rec("Ивашко Г", 4)]
    first = search("ив", dataset)
    assert first == [dataset[0], dataset[2], dataset[3]]
    assert search("ив", dataset) == first
