"""Runtime configuration defaults for logging, filtering and display."""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEBUG_LOG_PATH = os.environ.get("BACKOFFICE_DEBUG_LOG", "/tmp/backoffice-debug.log")
LOG_LEVEL = os.environ.get("BACKOFFICE_LOG_LEVEL", "INFO").upper()

# Selector value that disables the category/status predicate.
ALL_FILTER = "all"

CURRENCY_SYMBOL = "$"
ORDER_ID_PREFIX = "ORD-"
TOP_ITEMS_LIMIT = 5

_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging() -> None:
    """Route package logs to the debug file; the terminal belongs to the TUI."""
    package_logger = logging.getLogger("backoffice")
    if package_logger.handlers:
        return

    log_file = Path(DEBUG_LOG_PATH)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    package_logger.propagate = False
