"""Process-wide logging for the fact bot."""

from __future__ import annotations

import logging
import os

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# One httpx request per fact fetch, one Telegram edit per render.
_NOISY_LOGGERS = ("httpx", "httpcore", "telegram")


def resolve_level(name: str | None) -> int:
    """Map a LOG_LEVEL value such as ``debug`` to a logging level.

    Unknown names fall back to INFO.
    """
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)
    root.setLevel(resolve_level(level or os.environ.get("LOG_LEVEL")))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["resolve_level", "setup_logging"]
