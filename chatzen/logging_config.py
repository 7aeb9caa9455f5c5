from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "chatzen"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

# HTTP clients used by google-genai and gradio log every request at INFO.
CHATTY_LOGGERS = ("httpx", "httpcore", "google_genai")


def resolve_level(level: Union[int, str]) -> int:
    """Accept a logging constant or a --log-level name such as "debug"."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {level}")
    return value


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the ``chatzen`` logger tree to stdout and, optionally, a UTF-8 file.

    Safe to call again (e.g. from tests or when the web app restarts): the
    previous handlers are replaced rather than stacked.
    """
    numeric_level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging initialized at %s", logging.getLevelName(numeric_level))
    return logger
