"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.records.dictionaries import DEFAULT_SYNONYMS, SynonymKeyTable


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str | None = Field(default=None, alias="TELEGRAM_BOT_TOKEN")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    synonyms_path: str | None = Field(default=None, alias="SYNONYMS_PATH")

    top_n: int = Field(default=20, alias="TOP_N")
    org_name: str = Field(default="", alias="ORG_NAME")
    org_inn: str = Field(default="", alias="ORG_INN")
    reverse_copy_order: bool = Field(default=False, alias="REVERSE_COPY_ORDER")
    max_file_bytes: int = Field(default=20 * 1024 * 1024, alias="MAX_FILE_BYTES")
    max_chats: int = Field(default=100, alias="MAX_CHATS")

    @field_validator("top_n", "max_file_bytes", "max_chats")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def validate_synonyms_path(self) -> Settings:
        """Fail at startup if the configured synonym table cannot be loaded."""

        if self.synonyms_path:
            try:
                self.synonym_table()
            except RuntimeError as exc:
                raise ValueError(str(exc)) from exc
        return self

    def synonym_table(self) -> SynonymKeyTable:
        """Return the alias table: the JSON override if configured, else the built-in one."""

        if self.synonyms_path:
            return SynonymKeyTable.from_json(self.synonyms_path)
        return DEFAULT_SYNONYMS


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
