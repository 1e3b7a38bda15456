#!/usr/bin/env python3
# rlconsole/interface/console.py
from __future__ import annotations

"""
The Console: one addressable line-reading and dispatching session.

Several consoles may live in the same process. They share one line engine
through a HistoryManager, each seeing only its own history and its own
commands in completion.

Example:
    with Console("calc> ") as console:
        console.register("add", lambda tokens: print(sum(map(int, tokens[1:]))))
        console.interact()
"""

import logging
from pathlib import Path
from typing import Callable, Optional, TextIO

from rlconsole.commands import CommandRegistry, Handler, ReturnCode
from rlconsole.commands import command as _command
from rlconsole.interface.completion import CompletionAdapter
from rlconsole.interface.handler import Dispatcher, register_builtins
from rlconsole.interface.history import EMPTY_HISTORY, HISTORY, HistoryManager, HistorySnapshot
from rlconsole.interface.script import ScriptRunner
from rlconsole.ui import print_line

logger = logging.getLogger(__name__)


class Console:
    """Greeting, commands, and a private view of the shared history."""

    def __init__(
        self,
        greeting: str,
        *,
        history: Optional[HistoryManager] = None,
        stdout: Optional[TextIO] = None,
        history_file: Path | str | None = None,
        history_length: int = -1,
        enable_completion: bool = True,
    ) -> None:
        self.greeting = greeting
        self.registry = CommandRegistry()
        # None until this console first hands the engine to someone else
        self.history_snapshot: Optional[HistorySnapshot] = None
        self.history_file = Path(history_file) if history_file is not None else None
        self.history_length = history_length
        self.completer: Optional[CompletionAdapter] = (
            CompletionAdapter(self.registry) if enable_completion else None)

        self._stdout = stdout
        self._history = history if history is not None else HISTORY
        # The engine holds our completer (and through it the registry);
        # nothing reachable from the registry may point back at self.
        self._dispatcher = Dispatcher(self.registry, stdout=stdout)
        self._scripts = ScriptRunner(self._dispatcher.execute_command, stdout=stdout)
        self._closed = False

        self._dispatcher.builtins.update(register_builtins(
            self.registry, run_script=self._scripts.execute_file, stdout=stdout))

        if self.history_file is not None:
            loaded = HistorySnapshot.load(self.history_file)
            if len(loaded):
                self.history_snapshot = loaded
                logger.debug("Loaded %d history entries from %s", len(loaded), self.history_file)

        self._history.register(self)

    def __repr__(self) -> str:
        return f"Console({self.greeting!r})"

    # ---------------- Commands ----------------

    def register(self, name: str, handler: Handler) -> None:
        """Register (or replace) the handler for `name`."""
        self.registry.register(name, handler)

    def command(self, name: str | None = None) -> Callable[[Handler], Handler]:
        """Decorator form of register()."""
        return _command(self.registry, name=name)

    def list_commands(self) -> list[str]:
        return self.registry.names()

    # ---------------- Execution ----------------

    def execute_command(self, line: str) -> int:
        """Execute `line` as if it had been typed at the prompt."""
        return self._dispatcher.execute_command(line)

    def execute_file(self, path: Path | str) -> int:
        """
        Execute every command of a script, stopping at the first one that
        does not return OK. Returns that command's code, or OK.
        """
        return self._scripts.execute_file(path)

    def read_line(self) -> int:
        """Read one line from the engine, record it and execute it."""
        if self._closed:
            raise RuntimeError(f"{self!r} is closed")
        self._history.reserve(self)

        line = self._history.engine.read_line(self.greeting)
        if line is None:
            # End of input does not print a newline by itself
            print_line(file=self._stdout)
            return ReturnCode.QUIT

        if line:
            self._history.append(self, line)

        return self.execute_command(line)

    def interact(self) -> int:
        """Read and execute lines until a command asks to quit."""
        result: int = ReturnCode.OK
        while True:
            try:
                result = self.read_line()
            except KeyboardInterrupt:
                # Abandon the current line, keep the session
                print_line(file=self._stdout)
                continue
            if result == ReturnCode.QUIT:
                return result

    # ---------------- History ----------------

    @property
    def history(self) -> HistorySnapshot:
        """This console's history, live if it currently owns the engine."""
        if self._history.active is self:
            return self._history.current_history()
        return self.history_snapshot or EMPTY_HISTORY

    @property
    def is_active(self) -> bool:
        return self._history.active is self

    # ---------------- Lifecycle ----------------

    def close(self) -> None:
        """Release the engine if owned, persist history, drop the snapshot."""
        if self._closed:
            return
        self._closed = True
        self._history.deregister(self)

        if self.history_file is not None and self.history_snapshot is not None:
            try:
                self.history_snapshot.dump(self.history_file, limit=self.history_length)
            except OSError as exc:
                logger.warning("Could not save history to %s: %s", self.history_file, exc)
        self.history_snapshot = None

    def __enter__(self) -> "Console":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
