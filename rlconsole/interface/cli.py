#!/usr/bin/env python3
# rlconsole/interface/cli.py
from __future__ import annotations

"""
Line editing engines.

An engine provides blocking line input, a single history buffer and a
completion hook. Consoles never touch an engine directly; they go through
a HistoryManager that swaps the history between them.

Selection order for make_engine("auto"):
    1) prompt_toolkit (rich completion + history)
    2) readline / pyreadline3 (basic completion + history)
    3) plain input (last resort, no completion)
"""

import sys
from typing import TYPE_CHECKING, Optional, TextIO

from rlconsole.interface.history import HistorySnapshot

if TYPE_CHECKING:
    from rlconsole.interface.completion import CompletionAdapter

ENGINE_NAMES: tuple[str, ...] = ("auto", "prompt_toolkit", "readline", "plain")


class LineEngine:
    """
    Base interface for line engines.

    Subclasses must implement read_line(). The base keeps the history in
    memory; engines backed by a native history buffer override the three
    history methods.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._completer: Optional["CompletionAdapter"] = None

    def read_line(self, prompt: str) -> Optional[str]:  # pragma: no cover - interface
        """Block for one line; None on end of input."""
        raise NotImplementedError

    def add_history(self, line: str) -> None:
        self._entries.append(line)

    def capture_history(self) -> HistorySnapshot:
        return HistorySnapshot.of(self._entries)

    def restore_history(self, snapshot: HistorySnapshot) -> None:
        self._entries = list(snapshot.entries)

    def set_completer(self, completer: Optional["CompletionAdapter"]) -> None:
        self._completer = completer


# ===== Preferred: prompt_toolkit =====
class PromptToolkitEngine(LineEngine):
    """Rich line editor with history recall and completion."""

    def __init__(self) -> None:
        super().__init__()
        from prompt_toolkit import prompt
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import InMemoryHistory

        self._prompt = prompt
        self._history_cls = InMemoryHistory
        engine = self

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                adapter = engine._completer
                if adapter is None:
                    return
                word = document.get_word_before_cursor(WORD=True)
                start = len(document.text_before_cursor) - len(word)
                for match in adapter.matches(word, start):
                    # replace exactly the word being typed
                    yield Completion(match, start_position=-len(word))

        self._prompt_completer = _Completer()

    def _history_view(self):
        # prompt_toolkit appends accepted input to the history it is given;
        # hand it a throwaway copy so only add_history() grows the buffer.
        history = self._history_cls()
        for entry in self._entries:
            history.append_string(entry)
        return history

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return self._prompt(
                prompt,
                history=self._history_view(),
                completer=self._prompt_completer,
                complete_while_typing=False,
            )
        except EOFError:
            return None


# ===== Fallback: readline / pyreadline3 =====
class ReadlineEngine(LineEngine):
    """GNU readline (or libedit) through the stdlib module."""

    def __init__(self) -> None:
        super().__init__()
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        # The console decides what is added to the history
        readline.set_auto_history(False)
        # Only whitespace separates tokens
        try:
            readline.set_completer_delims(" \t\n")
        except Exception:
            pass
        try:
            readline.parse_and_bind("tab: complete")
        except Exception:
            pass

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            return None

    def add_history(self, line: str) -> None:
        self.readline.add_history(line)

    def capture_history(self) -> HistorySnapshot:
        count = self.readline.get_current_history_length()
        items = (self.readline.get_history_item(index)
                 for index in range(1, count + 1))
        return HistorySnapshot.of(item for item in items if item is not None)

    def restore_history(self, snapshot: HistorySnapshot) -> None:
        self.readline.clear_history()
        for entry in snapshot.entries:
            self.readline.add_history(entry)

    def set_completer(self, completer: Optional["CompletionAdapter"]) -> None:
        super().set_completer(completer)
        if completer is None:
            self.readline.set_completer(None)
            return

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            return completer.complete(text_fragment, self.readline.get_begidx(), state_index)

        self.readline.set_completer(_complete)


# ===== Last resort: plain input =====
class PlainEngine(LineEngine):
    """
    No editing, no completion. Reads from input() or from `stream` when
    one is given (useful for piped or scripted sessions).
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__()
        self._stream = stream

    def read_line(self, prompt: str) -> Optional[str]:
        if self._stream is None:
            try:
                return input(prompt)
            except EOFError:
                return None
        raw = self._stream.readline()
        if raw == "":
            return None
        return raw.rstrip("\r\n")


def make_engine(preference: str = "auto") -> LineEngine:
    """
    Factory to select a line engine at runtime.

    'auto' prefers prompt_toolkit, then readline, then plain input. It goes
    straight to plain input when stdin is not a terminal.
    """
    if preference not in ENGINE_NAMES:
        raise ValueError(
            f"Unknown engine {preference!r}; expected one of {ENGINE_NAMES}")
    if preference == "prompt_toolkit":
        return PromptToolkitEngine()
    if preference == "readline":
        return ReadlineEngine()
    if preference == "plain":
        return PlainEngine()

    isatty = getattr(sys.stdin, "isatty", None)
    if not (isatty and isatty()):
        return PlainEngine()
    # Try prompt_toolkit first
    try:
        return PromptToolkitEngine()
    except ImportError:
        # Try readline/pyreadline3
        try:
            return ReadlineEngine()
        except ImportError:
            return PlainEngine()
