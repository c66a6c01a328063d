"""
Logging setup for the calendar application.

All modules log through named loggers under the "campus_calendar"
hierarchy (e.g. "campus_calendar.calendar.parser"). This module attaches a
single stdout handler to the root of that hierarchy.

Log Format:
==========
    [2024-03-10 09:00:00] WARNING [campus_calendar.calendar.parser] Unparseable date value: 'not-a-date'
"""

import logging
import sys
from typing import Optional

from campus_calendar.core.config import settings


LOGGER_NAME = "campus_calendar"
LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the application logger.

    Safe to call more than once: the handler is only added the first time.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL

    Returns:
        The "campus_calendar" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
