"""Record models (Pydantic).

`IncomeRecord` is the only data contract produced by the ingestion pipeline and consumed by the
search engine and presentation helpers. Records are immutable value objects.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

NULL_SENTINEL = "null"


class CanonicalField(StrEnum):
    """Canonical record fields recognized in input files."""

    name = "name"
    income = "income"
    dob = "dob"


class IncomeRecord(BaseModel):
    """A `(name, income, optional dob)` tuple recovered from an input file.

    The name keeps its raw casing; `dob` keeps its raw format. A literal `"null"` dob (any casing)
    is stored as `None`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    income: float
    dob: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must be non-empty")
        return value

    @field_validator("income")
    @classmethod
    def validate_income(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("income must be a finite number")
        return value

    @field_validator("dob")
    @classmethod
    def validate_dob(cls, value: str | None) -> str | None:
        if value is None or value.lower() == NULL_SENTINEL:
            return None
        return value


Dataset = Sequence[IncomeRecord]


class AnalyzedPerson(BaseModel):
    """A record prepared for presentation (display-cased name plus organization details)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    org: str = ""
    inn: str = ""
    dob: str | None = None
