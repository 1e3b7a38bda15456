from __future__ import annotations

import io
import logging

import pytest

from rlconsole.ui import ColorizingStreamHandler, PlainFormatter, colorize, init_logger


class _Terminal(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_colorize_leaves_redirected_output_plain() -> None:
    assert colorize("warn", "yellow", stream=io.StringIO()) == "warn"


def test_colorize_on_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setattr("os.name", "posix")

    assert colorize("warn", "yellow", stream=_Terminal()) == "\x1b[33mwarn\x1b[0m"
    assert colorize("warn", "no-such-style", stream=_Terminal()) == "warn"


def test_no_color_disables_terminal_colour(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert colorize("warn", "red", stream=_Terminal()) == "warn"


def test_stream_handler_strips_escapes_off_terminal() -> None:
    stream = io.StringIO()
    handler = ColorizingStreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    record = logging.LogRecord("t", logging.WARNING, __file__, 1, "\x1b[31mhot\x1b[0m", None, None)

    handler.emit(record)

    assert stream.getvalue() == "WARNING hot\n"


def test_plain_formatter_does_not_touch_the_record() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "\x1b[2mquiet\x1b[0m", None, None)

    assert PlainFormatter("%(message)s").format(record) == "quiet"
    assert record.msg == "\x1b[2mquiet\x1b[0m"


def test_init_logger_reuses_handlers_and_writes_file(tmp_path) -> None:
    logfile = tmp_path / "console.log"

    init_logger(level="WARNING")
    logger = init_logger(level="ERROR", logfile=str(logfile))
    logger.debug("to the file only")

    kinds = [type(h).__name__ for h in logger.handlers]
    assert kinds.count("ColorizingStreamHandler") == 1
    assert kinds.count("RotatingFileHandler") == 1
    for handler in logger.handlers:
        handler.flush()
    assert "to the file only" in logfile.read_text(encoding="utf-8")
