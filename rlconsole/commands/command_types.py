#!/usr/bin/env python3
# rlconsole/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- ReturnCode: the result contract shared by every console operation.
- Handler: the callable protocol for any command implementation.
"""

from enum import IntEnum
from typing import Optional, Protocol, Sequence


class ReturnCode(IntEnum):
    """
    Results surfaced by dispatch, scripts and the read loop.

    Handlers may return any integer >= 1 as their own failure code; only
    the built-in 'quit' and 'exit' commands can produce QUIT.
    """
    QUIT = -1
    OK = 0
    ERROR = 1


class Handler(Protocol):
    """Protocol for any command function: tokens in, non-negative code out."""

    def __call__(self, tokens: Sequence[str]) -> Optional[int]:  # pragma: no cover - signature only
        ...
