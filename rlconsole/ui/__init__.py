#!/usr/bin/env python3
# rlconsole/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import ANSI, colorize, strip_ansi, supports_color
from .console import PRINT_MUTEX, print_line
from .logging import init_logger, ColorizingStreamHandler, PlainFormatter

__all__ = [
    "ANSI",
    "colorize",
    "strip_ansi",
    "supports_color",
    "PRINT_MUTEX",
    "print_line",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
