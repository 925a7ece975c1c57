"""Telegram entrypoint: load settings, build the per-chat dataset store and poll for updates."""

from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import BotCommand

from src.app import create_app
from src.bot.router import router
from src.config.logging import configure_logging
from src.config.settings import load_settings

logger = logging.getLogger(__name__)

# Shown in the Telegram command menu; any other slash command gets the help text.
BOT_COMMANDS = (
    BotCommand(command="top", description="Самые высокие доходы: /top N"),
    BotCommand(command="help", description="Как загрузить файл и искать по имени"),
)


async def main() -> None:
    """Poll Telegram until interrupted. Uploaded datasets live only as long as the process."""

    settings = load_settings()
    configure_logging(settings.log_level)
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is required to run the bot")

    app = create_app(settings)

    # Replies are plain text: names may contain characters HTML or Markdown would interpret.
    bot = Bot(token=settings.telegram_bot_token, default=DefaultBotProperties(parse_mode=None))
    dp = Dispatcher()
    dp.include_router(router)

    try:
        await bot.set_my_commands(list(BOT_COMMANDS))
        logger.info("bot started top_n=%d max_chats=%d", settings.top_n, settings.max_chats)
        await dp.start_polling(bot, app=app)
    finally:
        logger.info("shutting down")
        await bot.session.close()


def run() -> None:
    """Console-script entry point (`income-finder-bot`)."""

    asyncio.run(main())


if __name__ == "__main__":
    run()
