"""
Logging setup for rocketcart.

The root logger gets one stdout handler on import. LOG_LEVEL picks the
level, LOG_FORMAT=simple drops the timestamp for hosts that add their own.

Usage:
    from rocketcart.logging import get_logger
    logger = get_logger(__name__)

    logger.info(f"Cart loaded with {cart.size} products")
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Client libraries that log every inventory/Telegram request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")

MAX_LOGGED_ID_LENGTH = 12


def _level_from_env() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = _level_from_env()
    root.setLevel(level)

    simple = os.environ.get("LOG_FORMAT", "").lower() == "simple"
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if simple else LOG_FORMAT))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a module, usually get_logger(__name__)."""
    return logging.getLogger(name)


def loggable_id(value: object) -> str:
    """
    Render a product id for a log line.

    Control characters are escaped so a crafted id cannot start a fake
    log entry (CWE-117), and long values are cut short.
    """
    if value is None or value == "":
        return "N/A"
    text = (
        str(value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    if len(text) > MAX_LOGGED_ID_LENGTH:
        return text[:MAX_LOGGED_ID_LENGTH] + "..."
    return text


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "loggable_id",
]
