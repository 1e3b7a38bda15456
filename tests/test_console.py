from __future__ import annotations

import io
from typing import Optional

import pytest

from rlconsole.commands import ReturnCode
from rlconsole.interface import Console, HistoryManager, PlainEngine


def _console_reading(text: str, out: io.StringIO, greeting: str = "> ") -> tuple[Console, HistoryManager]:
    manager = HistoryManager(PlainEngine(io.StringIO(text)))
    return Console(greeting, history=manager, stdout=out), manager


def test_read_line_dispatches_and_records(out: io.StringIO) -> None:
    console, manager = _console_reading("foo bar\n", out)
    calls: list[list[str]] = []
    console.register("foo", lambda tokens: calls.append(list(tokens)))

    assert console.read_line() == ReturnCode.OK
    assert calls == [["foo", "bar"]]
    assert console.history.entries == ("foo bar",)
    assert manager.active is console


def test_empty_line_is_not_recorded(out: io.StringIO) -> None:
    console, _ = _console_reading("\n   \n", out)

    assert console.read_line() == ReturnCode.OK
    assert console.read_line() == ReturnCode.OK
    # whitespace-only lines are kept, truly empty ones are not
    assert console.history.entries == ("   ",)


def test_end_of_input_quits_with_newline(out: io.StringIO) -> None:
    console, _ = _console_reading("", out)

    assert console.read_line() == ReturnCode.QUIT
    assert out.getvalue() == "\n"


def test_read_line_returns_handler_code(out: io.StringIO) -> None:
    console, _ = _console_reading("fail\nbogus\nquit\n", out)
    console.register("fail", lambda tokens: 5)

    assert console.read_line() == 5
    assert console.read_line() == ReturnCode.ERROR
    assert console.read_line() == ReturnCode.QUIT
    assert console.history.entries == ("fail", "bogus", "quit")


def test_interleaved_consoles_keep_separate_histories(out: io.StringIO) -> None:
    manager = HistoryManager(PlainEngine(io.StringIO("a1\nb1\na2\n")))
    a = Console("a> ", history=manager, stdout=out)
    b = Console("b> ", history=manager, stdout=out)
    for console in (a, b):
        console.register(console.greeting[0] + "1", lambda tokens: 0)
        console.register(console.greeting[0] + "2", lambda tokens: 0)

    assert a.read_line() == ReturnCode.OK
    assert b.read_line() == ReturnCode.OK
    assert a.read_line() == ReturnCode.OK

    assert a.history.entries == ("a1", "a2")
    assert b.history.entries == ("b1",)


def test_interact_runs_until_quit(out: io.StringIO) -> None:
    console, _ = _console_reading("count\ncount\nexit\ncount\n", out)
    calls: list[int] = []
    console.register("count", lambda tokens: calls.append(1))

    assert console.interact() == ReturnCode.QUIT
    assert len(calls) == 2


def test_interact_stops_at_end_of_input(out: io.StringIO) -> None:
    console, _ = _console_reading("bogus\n", out)
    assert console.interact() == ReturnCode.QUIT


class _InterruptOnce(PlainEngine):
    def __init__(self, text: str) -> None:
        super().__init__(io.StringIO(text))
        self.interrupted = False

    def read_line(self, prompt: str) -> Optional[str]:
        if not self.interrupted:
            self.interrupted = True
            raise KeyboardInterrupt
        return super().read_line(prompt)


def test_interact_survives_keyboard_interrupt(out: io.StringIO) -> None:
    engine = _InterruptOnce("quit\n")
    console = Console("> ", history=HistoryManager(engine), stdout=out)

    assert console.interact() == ReturnCode.QUIT
    assert engine.interrupted


def test_context_manager_closes(out: io.StringIO) -> None:
    manager = HistoryManager(PlainEngine(io.StringIO("help\n")))
    with Console("> ", history=manager, stdout=out) as console:
        console.read_line()
        assert manager.active is console

    assert manager.active is None
    assert console.history_snapshot is None


def test_closed_console_refuses_to_read(out: io.StringIO) -> None:
    console, manager = _console_reading("help\n", out)
    console.close()

    with pytest.raises(RuntimeError, match="closed"):
        console.read_line()
    assert manager.active is None
    assert console not in manager.consoles()
