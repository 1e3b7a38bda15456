#!/usr/bin/env python3
# rlconsole/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console and command dispatch.

Provides:
- Line engines with history and completion (prompt_toolkit / readline / plain).
- The HistoryManager that lends the single engine history to one console at a time.
- Substring command completion.
- Tokenizer, dispatcher and built-in commands.
- Script execution.
- The Console that composes all of the above.
"""


# Leaf helpers first
from .parser import tokenize
from .history import EMPTY_HISTORY, HISTORY, HistoryManager, HistorySnapshot
from .completion import CompletionAdapter

# Engines
from .cli import (
    ENGINE_NAMES,
    LineEngine,
    PlainEngine,
    PromptToolkitEngine,
    ReadlineEngine,
    make_engine,
)

# Dispatch and scripts
from .handler import BUILT_IN_COMMANDS, QUIT_COMMANDS, Dispatcher, register_builtins
from .script import ScriptRunner

# Console (after everything it composes)
from .console import Console

__all__ = [
    # parser
    "tokenize",
    # history
    "EMPTY_HISTORY",
    "HISTORY",
    "HistoryManager",
    "HistorySnapshot",
    # completion
    "CompletionAdapter",
    # engines
    "ENGINE_NAMES",
    "LineEngine",
    "PlainEngine",
    "PromptToolkitEngine",
    "ReadlineEngine",
    "make_engine",
    # handler
    "BUILT_IN_COMMANDS",
    "QUIT_COMMANDS",
    "Dispatcher",
    "register_builtins",
    # scripts
    "ScriptRunner",
    # console
    "Console",
]
