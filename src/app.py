"""Application composition root.

This module wires together configuration, the alias table and the per-chat dataset store used by
the bot runtime.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field

from src.config.settings import Settings
from src.records.dictionaries import SynonymKeyTable
from src.records.schema import IncomeRecord


@dataclass
class DatasetStore:
    """In-memory datasets keyed by chat id.

    Each upload replaces the chat's dataset wholesale; nothing is persisted. At most `max_chats`
    datasets are kept: storing one more evicts the least recently used chat.
    """

    max_chats: int = 100
    _datasets: OrderedDict[int, tuple[IncomeRecord, ...]] = field(default_factory=OrderedDict)

    def get(self, chat_id: int) -> tuple[IncomeRecord, ...] | None:
        records = self._datasets.get(chat_id)
        if records is not None:
            self._datasets.move_to_end(chat_id)
        return records

    def replace(self, chat_id: int, records: tuple[IncomeRecord, ...]) -> None:
        self._datasets[chat_id] = records
        self._datasets.move_to_end(chat_id)
        while len(self._datasets) > self.max_chats:
            self._datasets.popitem(last=False)

    def clear(self, chat_id: int) -> None:
        self._datasets.pop(chat_id, None)


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    synonyms: SynonymKeyTable
    datasets: DatasetStore


def create_app(settings: Settings) -> App:
    """Create the application container."""

    return App(
        settings=settings,
        synonyms=settings.synonym_table(),
        datasets=DatasetStore(max_chats=settings.max_chats),
    )
