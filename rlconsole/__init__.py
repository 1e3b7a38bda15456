#!/usr/bin/env python3
# rlconsole/__init__.py
from __future__ import annotations
"""
Embeddable interactive consoles sharing one line editor.

Avoid importing the entry point here; `python -m rlconsole` pulls in
configuration and logging setup on its own.
"""

from rlconsole.commands import CommandRegistry, Handler, ReturnCode
from rlconsole.interface import (
    EMPTY_HISTORY,
    HISTORY,
    Console,
    HistoryManager,
    HistorySnapshot,
    make_engine,
)

__version__ = "0.1.0"

__all__ = [
    "CommandRegistry",
    "Handler",
    "ReturnCode",
    "Console",
    "HistoryManager",
    "HistorySnapshot",
    "EMPTY_HISTORY",
    "HISTORY",
    "make_engine",
]
