from __future__ import annotations

import io
import logging
from typing import Callable, Iterator

import pytest

from rlconsole.interface import Console, HistoryManager, PlainEngine


class RecordingEngine(PlainEngine):
    """Plain engine that remembers how the manager drove it."""

    def __init__(self, text: str = "") -> None:
        super().__init__(io.StringIO(text))
        self.restores = 0
        self.completers: list[object] = []

    def restore_history(self, snapshot) -> None:
        self.restores += 1
        super().restore_history(snapshot)

    def set_completer(self, completer) -> None:
        self.completers.append(completer)
        super().set_completer(completer)


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def manager(engine: RecordingEngine) -> HistoryManager:
    return HistoryManager(engine)


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_console(manager: HistoryManager, out: io.StringIO) -> Iterator[Callable[..., Console]]:
    created: list[Console] = []

    def _make(greeting: str = "> ", **kwargs) -> Console:
        kwargs.setdefault("history", manager)
        kwargs.setdefault("stdout", out)
        console = Console(greeting, **kwargs)
        created.append(console)
        return console

    yield _make
    for console in created:
        console.close()


@pytest.fixture
def console(make_console: Callable[..., Console]) -> Console:
    return make_console()


@pytest.fixture(autouse=True)
def _reset_rlconsole_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("rlconsole")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
