#!/usr/bin/env python3
# rlconsole/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

Completion only ever applies to the first token of a line. The engines use
the readline-style incremental protocol: the same query is asked with
state 0, 1, 2, ... and each call returns the next match or None.
"""

from typing import Optional

from rlconsole.commands import CommandRegistry


class CompletionAdapter:
    """
    Bridge between the engine's completion protocol and one registry.

    Matching is by substring, not prefix: 'el' offers 'help'.
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry
        # Resumable cursor over a snapshot of the registry names
        self._candidates: list[str] = []
        self._position = 0

    def complete(self, text: str, start: int, state: int) -> Optional[str]:
        """Return the next command name containing `text`, or None."""
        if start != 0:
            return None

        if state == 0:
            self._candidates = self._registry.names()
            self._position = 0

        while self._position < len(self._candidates):
            candidate = self._candidates[self._position]
            self._position += 1
            if text in candidate:
                return candidate
        return None

    def matches(self, text: str, start: int = 0) -> list[str]:
        """Run a full query and collect every match."""
        found: list[str] = []
        state = 0
        match = self.complete(text, start, state)
        while match is not None:
            found.append(match)
            state += 1
            match = self.complete(text, start, state)
        return found
