#!/usr/bin/env python3
# rlconsole/commands/commands.py
from __future__ import annotations

"""
Command registry and decorator utilities.

This module provides:
- CommandRegistry: per-console mapping of command names to handlers.
- command: decorator factory registering functions on a given registry.
"""

from typing import Callable, Dict, Iterator, Optional

from rlconsole.commands.command_types import Handler


class CommandRegistry:
    """Holds the handlers of one console and provides lookup utilities."""

    def __init__(self) -> None:
        # Name -> handler, insertion ordered
        self._handlers: Dict[str, Handler] = {}

    # ---------------- Registration ----------------

    def register(self, name: str, handler: Handler) -> None:
        """Insert or overwrite a handler. Names are taken verbatim."""
        self._handlers[name] = handler

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[Handler]:
        """Return the handler registered under `name`, or None."""
        return self._handlers.get(name)

    def names(self) -> list[str]:
        """Return all registered names (built-ins included)."""
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


def command(
    registry: CommandRegistry,
    *,
    name: str | None = None,
) -> Callable[[Handler], Handler]:
    """
    Decorator to register a function as a command on `registry`.

    The function name is transformed from snake_case to kebab-case when
    `name` is not provided.
    """

    def wrapper(func: Handler) -> Handler:
        command_name = name or func.__name__.replace("_", "-")  # type: ignore[attr-defined]
        registry.register(command_name, func)
        return func

    return wrapper
