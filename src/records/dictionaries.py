"""Bilingual field aliases (the synonym key table).

Aliases are matched case-insensitively and tried in the listed order: the first alias present in a
record wins. Extending the recognized vocabulary means extending this table (or loading an override
from JSON via `SYNONYMS_PATH`), never passing aliases at call time.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from src.records.schema import CanonicalField

FIELD_SYNONYMS: dict[CanonicalField, tuple[str, ...]] = {
    CanonicalField.name: ("name", "имя", "фио", "full name", "fullname", "сотрудник"),
    CanonicalField.income: (
        "income",
        "доход",
        "salary",
        "зарплата",
        "годовой доход",
        "сумма годового дохода",
        "общая сумма дохода",
    ),
    CanonicalField.dob: ("dob", "date of birth", "дата рождения", "birthdate"),
}


class SynonymKeyTable(BaseModel):
    """Read-only mapping from canonical field to its ordered alias list."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: tuple[str, ...]
    income: tuple[str, ...]
    dob: tuple[str, ...]

    @field_validator("name", "income", "dob")
    @classmethod
    def normalize_aliases(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Lower-case and strip aliases; drop blanks and duplicates while preserving order."""

        aliases: list[str] = []
        for alias in value:
            key = alias.strip().lower()
            if key and key not in aliases:
                aliases.append(key)
        if not aliases:
            raise ValueError("at least one alias is required")
        return tuple(aliases)

    def aliases(self, field: CanonicalField) -> tuple[str, ...]:
        return getattr(self, field.value)

    def column_index(self, header: list[str], field: CanonicalField) -> int | None:
        """Return the index of the first header cell that is an alias of `field`."""

        accepted = self.aliases(field)
        for idx, cell in enumerate(header):
            if cell in accepted:
                return idx
        return None

    @classmethod
    def from_json(cls, path: str | Path) -> SynonymKeyTable:
        """Load an alias table from a JSON object (`{"name": [...], "income": [...], "dob": [...]}`).

        Raises:
            RuntimeError: If the file cannot be read or does not describe a valid table.
        """

        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            return cls.model_validate(payload)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise RuntimeError(f"Invalid synonym table {path}: {exc}") from exc


DEFAULT_SYNONYMS = SynonymKeyTable(
    name=FIELD_SYNONYMS[CanonicalField.name],
    income=FIELD_SYNONYMS[CanonicalField.income],
    dob=FIELD_SYNONYMS[CanonicalField.dob],
)
