"""Record ingestion orchestration (structured array -> delimited table -> free text)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from src.ingest.json_parser import JSONStrategyError, parse_json_records
from src.ingest.table_parser import TableStrategyError, parse_table_records
from src.ingest.text_parser import parse_text_records
from src.records.dictionaries import DEFAULT_SYNONYMS, SynonymKeyTable
from src.records.schema import IncomeRecord

logger = logging.getLogger(__name__)


class EmptyResultError(ValueError):
    """Raised when no strategy recovers a single record from the content."""


ParseSource = Literal["json", "table", "text"]


@dataclass(frozen=True)
class ParseResult:
    """Parsed dataset plus the strategy that produced it."""

    records: tuple[IncomeRecord, ...]
    source: ParseSource


def parse_records_with_source(
        content: str,
        *,
        synonyms: SynonymKeyTable = DEFAULT_SYNONYMS,
) -> ParseResult:
    """Parse file content into records.

    Strategy:
        1) JSON array of objects.
        2) Delimited table with a recognized header.
        3) Free text (key-value blocks or `<name> <income>` lines).
    The first strategy that yields at least one record wins; results are never merged.

    Raises:
        EmptyResultError: If all strategies together produce zero records.
    """

    try:
        records = parse_json_records(content, synonyms=synonyms)
        if records:
            return _accept(records, "json")
    except JSONStrategyError as exc:
        logger.debug("json strategy not applicable reason=%s", exc)

    try:
        records = parse_table_records(content, synonyms=synonyms)
        if records:
            return _accept(records, "table")
    except TableStrategyError as exc:
        logger.debug("table strategy not applicable reason=%s", exc)

    records = parse_text_records(content, synonyms=synonyms)
    if records:
        return _accept(records, "text")

    raise EmptyResultError("no valid data found")


def _accept(records: list[IncomeRecord], source: ParseSource) -> ParseResult:
    logger.info("parsed source=%s records=%d", source, len(records))
    return ParseResult(records=tuple(records), source=source)


def parse_records(content: str, *, synonyms: SynonymKeyTable = DEFAULT_SYNONYMS) -> tuple[IncomeRecord, ...]:
    """Parse file content into an ordered dataset (convenience wrapper)."""

    return parse_records_with_source(content, synonyms=synonyms).records
