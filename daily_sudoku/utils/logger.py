"""Console logging for the ``daily-sudoku`` CLI and its collaborators.

Every module logs through ``get_logger(__name__)``, so records carry the
``daily_sudoku.*`` module path. ``main.py`` calls :func:`configure_logging`
once with the level parsed from ``--log-level``.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

# requests' transport logs every connection it opens to Supabase at DEBUG.
TRANSPORT_LOGGERS = ("urllib3",)


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Route all records to ``stream`` (stderr by default) at ``level``.

    The board and leaderboard are printed on stdout, so log lines stay on a
    separate stream unless a caller asks otherwise. Connection chatter from
    the HTTP transport is only shown when ``level`` is DEBUG.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    """Translate a ``--log-level`` value such as ``"debug"``; unknown names give ``default``."""

    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a ``daily_sudoku`` module; library use outside the CLI still gets a handler."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "daily_sudoku")
