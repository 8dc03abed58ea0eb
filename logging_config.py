"""Logging setup shared by the storefront package."""
from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("storefront")


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """Configure the root handler once and return the storefront logger."""
    level = level or os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)

    # Quiet noisy access logs
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    return logger


__all__ = ["logger", "setup_logging", "LOG_FORMAT"]
