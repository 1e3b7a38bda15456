#!/usr/bin/env python3
# rlconsole/interface/handler.py
from __future__ import annotations

"""
Command dispatch and the built-in commands.

Every line goes through Dispatcher.execute_command():
  - blank lines are OK
  - 'quit' / 'exit' are intercepted before any registry lookup
  - anything else is looked up by its first token and handed the full
    token list
Diagnostics are printed to the console output, never raised.
"""

import difflib
import logging
from typing import Any, Callable, Optional, Sequence, TextIO

from rlconsole.commands import CommandRegistry, Handler, ReturnCode
from rlconsole.interface.parser import tokenize
from rlconsole.ui import print_line

logger = logging.getLogger(__name__)

QUIT_COMMANDS: frozenset[str] = frozenset({"quit", "exit"})
BUILT_IN_COMMANDS: tuple[str, ...] = ("quit", "exit", "help", "run")


def _noop(tokens: Sequence[str]) -> int:
    """Placeholder for 'quit'/'exit'; dispatch never reaches it."""
    return ReturnCode.OK


class Dispatcher:
    """Resolve a line to a handler and map its result to a return code."""

    def __init__(self, registry: CommandRegistry, *, stdout: Optional[TextIO] = None) -> None:
        self.registry = registry
        self._stdout = stdout
        # Built-in handlers by name; their results (QUIT included) pass through
        self.builtins: dict[str, Handler] = {}

    def _print(self, text: str = "") -> None:
        print_line(text, file=self._stdout)

    def _suggest_similar_names(self, name: str) -> str:
        """Return a short suggestion string for misspelled commands."""
        matches = difflib.get_close_matches(
            name, self.registry.names(), n=3, cutoff=0.6)
        return f" Did you mean: {', '.join(matches)}?" if matches else ""

    def _normalize(self, command_name: str, result: Any) -> int:
        if result is None:
            return ReturnCode.OK
        try:
            code = int(result)
        except (TypeError, ValueError, OverflowError):
            self._print(
                f"[error] Command '{command_name}' returned a non-integer result: {result!r}")
            return ReturnCode.ERROR
        if code < 0:
            # QUIT is reserved to the built-ins
            logger.warning("Command %r returned negative code %d", command_name, code)
            return ReturnCode.ERROR
        return code

    def execute_command(self, line: str) -> int:
        """Tokenize `line`, dispatch it and return the resulting code."""
        tokens = tokenize(line)
        if not tokens:
            return ReturnCode.OK

        command_name = tokens[0]
        if command_name in QUIT_COMMANDS:
            return ReturnCode.QUIT

        handler = self.registry.get(command_name)
        if handler is None:
            self._print(
                f"Command '{command_name}' not found.{self._suggest_similar_names(command_name)}")
            return ReturnCode.ERROR

        logger.debug("Dispatching %r with %d argument(s)", command_name, len(tokens) - 1)
        try:
            result = handler(tokens)
        except Exception as exc:
            logger.debug("Command %r raised", command_name, exc_info=True)
            self._print(f"[error] {type(exc).__name__}: {exc}")
            return ReturnCode.ERROR
        if handler is self.builtins.get(command_name):
            return result
        return self._normalize(command_name, result)


def register_builtins(
    registry: CommandRegistry,
    *,
    run_script: Callable[[str], int],
    stdout: Optional[TextIO] = None,
) -> dict[str, Handler]:
    """Seed `registry` with quit, exit, help and run and return those handlers."""

    def help_command(tokens: Sequence[str]) -> int:
        print_line("Available commands are:", file=stdout)
        for name in registry.names():
            print_line(f"\t{name}", file=stdout)
        return ReturnCode.OK

    def run_command(tokens: Sequence[str]) -> int:
        if len(tokens) != 2:
            print_line(f"Usage: {tokens[0]} script_filename", file=stdout)
            return ReturnCode.ERROR
        return run_script(tokens[1])

    builtins: dict[str, Handler] = {
        "quit": _noop,
        "exit": _noop,
        "help": help_command,
        "run": run_command,
    }
    for name, handler in builtins.items():
        registry.register(name, handler)
    return builtins
