#!/usr/bin/env python3
# rlconsole/ui/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

from rlconsole.ui.ansi import ANSI, strip_ansi, supports_color
from rlconsole.ui.console import PRINT_MUTEX

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ColorizingStreamHandler(logging.StreamHandler):
    """Colours records by level when the stream is a terminal."""

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = supports_color(self.stream)

    def format(self, record: logging.LogRecord) -> str:
        message = strip_ansi(super().format(record))
        color = self._LEVEL_COLORS.get(record.levelno) if self._use_ansi else None
        return f"{color}{message}{ANSI['reset']}" if color else message

    def emit(self, record: logging.LogRecord) -> None:
        # Share the print lock so log lines never split console output
        with PRINT_MUTEX:
            super().emit(record)


class PlainFormatter(logging.Formatter):
    """Formatter for log files: no escape sequences."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def init_logger(
    name: str = "rlconsole",
    level: Union[int, str] = logging.INFO,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger: colour-aware stderr output at `level`
    and, with `logfile`, a rotating UTF-8 file that records everything
    from DEBUG up. Calling it again updates the level and adds a file
    handler if one is missing.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if logfile else level)
    logger.propagate = False

    stream_handler = next(
        (h for h in logger.handlers if isinstance(h, ColorizingStreamHandler)), None)
    if stream_handler is None:
        stream_handler = ColorizingStreamHandler(stream=sys.stderr)
        stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(stream_handler)
    stream_handler.setLevel(level)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(
            logfile, maxBytes=1_000_000, backupCount=2, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(PlainFormatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger
