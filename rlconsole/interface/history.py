#!/usr/bin/env python3
# rlconsole/interface/history.py
from __future__ import annotations

"""
Process-wide arbitration of the line engine's history buffer.

The line engine keeps a single global history. Every Console that wants to
read a line first reserves the engine through a HistoryManager, which saves
the outgoing owner's history into that console's snapshot and installs the
incoming owner's snapshot (or EMPTY_HISTORY for a fresh console).

Ownership is tracked with a weak reference: the manager never keeps a
console alive, and a console collected without close() simply leaves the
manager idle.
"""

import logging
import weakref
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, Optional

if TYPE_CHECKING:
    from rlconsole.interface.cli import LineEngine
    from rlconsole.interface.console import Console

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    """Immutable copy of the engine history, oldest entry first."""
    entries: tuple[str, ...] = ()

    @classmethod
    def of(cls, entries: Iterable[str]) -> "HistorySnapshot":
        return cls(tuple(entries))

    @classmethod
    def load(cls, path: Path | str) -> "HistorySnapshot":
        """Read one entry per line. A missing file is an empty history."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            return EMPTY_HISTORY
        return cls.of(line for line in text.splitlines() if line)

    def dump(self, path: Path | str, *, limit: int = -1) -> Path:
        """Write the newest `limit` entries (all when limit < 0)."""
        out = Path(path)
        if limit < 0:
            entries = self.entries
        else:
            entries = self.entries[-limit:] if limit else ()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text("".join(f"{e}\n" for e in entries), encoding="utf-8")
        return out

    def __len__(self) -> int:
        return len(self.entries)


# Shared sentinel installed for consoles that never owned the engine
EMPTY_HISTORY = HistorySnapshot()


class HistoryManager:
    """Arbiter of which Console owns the engine's live history."""

    def __init__(
        self,
        engine: Optional["LineEngine"] = None,
        *,
        engine_factory: Optional[Callable[[], "LineEngine"]] = None,
    ) -> None:
        self._engine = engine
        self._engine_factory = engine_factory
        self._active: Optional[weakref.ReferenceType["Console"]] = None
        self._consoles: "weakref.WeakSet[Console]" = weakref.WeakSet()

    # ---------------- Engine ----------------

    @property
    def engine(self) -> "LineEngine":
        """The shared engine, created on first use."""
        if self._engine is None:
            if self._engine_factory is not None:
                self._engine = self._engine_factory()
            else:
                from rlconsole.interface.cli import make_engine
                self._engine = make_engine()
            logger.debug("Line engine: %s", type(self._engine).__name__)
        return self._engine

    # ---------------- Membership ----------------

    @property
    def active(self) -> Optional["Console"]:
        """The console currently holding the live history, if any."""
        return self._active() if self._active is not None else None

    def consoles(self) -> list["Console"]:
        return list(self._consoles)

    def register(self, console: "Console") -> None:
        self._consoles.add(console)

    def deregister(self, console: "Console") -> None:
        """
        Forget `console`. When it is the active owner its live history is
        captured into its snapshot and the manager becomes idle; the engine
        keeps the stale entries until the next reserve replaces them.
        """
        if self.active is console:
            console.history_snapshot = self.engine.capture_history()
            self.engine.set_completer(None)
            self._active = None
            logger.debug("Released engine from closing console %r", console.greeting)
        self._consoles.discard(console)

    # ---------------- Ownership ----------------

    def reserve(self, console: "Console") -> None:
        """Hand the engine's history (and completion) over to `console`."""
        current = self.active
        if current is console:
            return

        engine = self.engine
        if current is not None:
            current.history_snapshot = engine.capture_history()
            logger.debug(
                "Saved %d history entries for %r", len(current.history_snapshot), current.greeting)

        snapshot = console.history_snapshot
        engine.restore_history(snapshot if snapshot is not None else EMPTY_HISTORY)
        engine.set_completer(console.completer)

        self._consoles.add(console)
        self._active = weakref.ref(console)
        logger.debug("Engine reserved by %r", console.greeting)

    def append(self, console: "Console", line: str) -> None:
        """Add one entry to `console`'s history, reserving first."""
        self.reserve(console)
        self.engine.add_history(line)

    def current_history(self) -> HistorySnapshot:
        """Entries visible in the engine right now."""
        return self.engine.capture_history()


# Global manager used by consoles that are not given one explicitly
HISTORY = HistoryManager()
