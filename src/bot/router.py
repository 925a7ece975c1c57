"""Bot router composition."""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command

from src.bot.handlers import handle_document, handle_message, handle_top

router = Router(name="root")
router.message.register(handle_document, F.document)
router.message.register(handle_top, Command("top"))
router.message.register(handle_message, F.text)
