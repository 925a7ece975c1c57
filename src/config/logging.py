"""Process-wide logging for the income-finder bot and CLI.

Only sources, counts and latencies are logged. The ingest pipeline and the handlers never hand
names, incomes or dates of birth to a logger.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# aiogram reports every handled update at INFO.
QUIET_LOGGERS = ("aiogram.event",)


def configure_logging(level: str | None = None) -> None:
    """Set the root level and format. Called once by each entrypoint after settings are loaded."""

    logging.basicConfig(level=(level or "INFO").upper(), format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
