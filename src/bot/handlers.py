"""aiogram message handlers.

Flow: the user uploads a file (document) which replaces the chat's dataset, then types partial
names to search it. `/top [N]` lists the highest incomes. Internal errors are logged and answered
with a generic message; parsed personal data never reaches the logs.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from time import monotonic

from aiogram.filters import CommandObject
from aiogram.types import Message

from src.app import App
from src.ingest.parser import EmptyResultError, parse_records_with_source
from src.records.presentation import analyze_records, clipboard_line, name_with_dob, top_earners
from src.records.schema import AnalyzedPerson
from src.search.engine import search

logger = logging.getLogger(__name__)

# Telegram rejects messages longer than 4096 characters.
MAX_REPLY_CHARS = 4000

MSG_NO_DATASET = "Сначала загрузите файл с данными."
MSG_NO_DATA_FOUND = "В файле не найдено корректных данных: каждая запись должна содержать имя и доход."
MSG_NOT_TEXT = "Не удалось прочитать файл как текст (ожидается UTF-8)."
MSG_TOO_LARGE = "Файл слишком большой."
MSG_NOTHING_FOUND = "Ничего не найдено."
MSG_BAD_TOP_N = "Использование: /top N, где N положительное число."
MSG_INTERNAL_ERROR = "Произошла ошибка, попробуйте ещё раз."
MSG_HELP = (
    "Отправьте файл (JSON, CSV или текст) с именами и доходами, затем вводите имя для поиска. "
    "/top N: самые высокие доходы."
)


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


def _chunk_lines(lines: Iterable[str], limit: int = MAX_REPLY_CHARS) -> list[str]:
    """Join lines into messages no longer than `limit` characters."""

    chunks: list[str] = []
    current: list[str] = []
    size = 0
    for line in lines:
        line = line[:limit]
        extra = len(line) + (1 if current else 0)
        if current and size + extra > limit:
            chunks.append("\n".join(current))
            current, size = [], 0
            extra = len(line)
        current.append(line)
        size += extra
    if current:
        chunks.append("\n".join(current))
    return chunks


def _search_lines(people: Iterable[AnalyzedPerson], *, reverse: bool) -> list[str]:
    """Name with dob per hit, followed by the copy-ready line when it adds organization details."""

    lines: list[str] = []
    for person in people:
        short = name_with_dob(person)
        full = clipboard_line(person, reverse=reverse)
        lines.append(short if full == person.name else f"{short}\n{full}")
    return lines


async def _answer_lines(message: Message, lines: list[str]) -> None:
    for chunk in _chunk_lines(lines):
        await message.answer(chunk)


def decode_content(payload: bytes) -> str:
    """Decode an uploaded file as UTF-8 (a leading BOM is dropped).

    Raises:
        UnicodeDecodeError: If the bytes are not valid UTF-8.
    """

    return payload.decode("utf-8-sig")


async def handle_document(message: Message, app: App) -> None:
    """Parse an uploaded file and replace the chat's dataset."""

    started = monotonic()
    chat_id = message.chat.id
    document = message.document

    # noinspection PyBroadException
    try:
        if document.file_size is not None and document.file_size > app.settings.max_file_bytes:
            await message.answer(MSG_TOO_LARGE)
            return

        buffer = await message.bot.download(document)
        content = decode_content(buffer.read())
        # The parse is CPU-bound; keep the event loop free for other chats.
        result = await asyncio.to_thread(parse_records_with_source, content, synonyms=app.synonyms)
    except UnicodeDecodeError:
        app.datasets.clear(chat_id)
        logger.info("upload rejected reason=not-utf8")
        await message.answer(MSG_NOT_TEXT)
        return
    except EmptyResultError:
        app.datasets.clear(chat_id)
        logger.info("upload rejected reason=no-records")
        await message.answer(MSG_NO_DATA_FOUND)
        return
    except Exception:
        logger.exception("document handler failed")
        await message.answer(MSG_INTERNAL_ERROR)
        return

    app.datasets.replace(chat_id, result.records)
    latency_ms = int((monotonic() - started) * 1000)
    logger.info("dataset loaded source=%s records=%d latency_ms=%d", result.source, len(result.records), latency_ms)
    await message.answer(f"Загружено записей: {len(result.records)}")


async def handle_top(message: Message, app: App, command: CommandObject) -> None:
    """Reply with the top-N earners of the chat's dataset, one copy-ready line each."""

    dataset = app.datasets.get(message.chat.id)
    if not dataset:
        await message.answer(MSG_NO_DATASET)
        return

    n = app.settings.top_n
    if command.args:
        try:
            n = int(command.args.strip())
        except ValueError:
            await message.answer(MSG_BAD_TOP_N)
            return
    if n <= 0:
        await message.answer(MSG_BAD_TOP_N)
        return

    people = analyze_records(
        top_earners(dataset, n),
        org=app.settings.org_name,
        inn=app.settings.org_inn,
    )
    await _answer_lines(
        message,
        [clipboard_line(person, reverse=app.settings.reverse_copy_order) for person in people],
    )


async def handle_message(message: Message, app: App) -> None:
    """Treat any other text as a search query over the chat's dataset."""

    query = message.text or ""
    if not query.strip():
        return
    if _is_command_text(query):
        await message.answer(MSG_HELP)
        return

    dataset = app.datasets.get(message.chat.id)
    if not dataset:
        await message.answer(MSG_NO_DATASET)
        return

    started = monotonic()
    matches = search(query, dataset)
    latency_ms = int((monotonic() - started) * 1000)
    logger.info("search matches=%d dataset=%d latency_ms=%d", len(matches), len(dataset), latency_ms)

    if not matches:
        await message.answer(MSG_NOTHING_FOUND)
        return

    people = analyze_records(matches, org=app.settings.org_name, inn=app.settings.org_inn)
    await _answer_lines(message, _search_lines(people, reverse=app.settings.reverse_copy_order))
