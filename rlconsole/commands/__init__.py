#!/usr/bin/env python3
# rlconsole/commands/__init__.py
from __future__ import annotations

"""
Package for command management and registration.

Provides:
- Data structures and protocols (`ReturnCode`, `Handler`).
- Per-console registry and decorator (`CommandRegistry`, `command`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import Handler, ReturnCode
from .commands import CommandRegistry, command

__all__ = [
    "Handler",
    "ReturnCode",
    "CommandRegistry",
    "command",
]
