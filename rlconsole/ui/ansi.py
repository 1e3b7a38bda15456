#!/usr/bin/env python3
# rlconsole/ui/ansi.py
from __future__ import annotations

"""
Colour for terminal diagnostics.

Escapes are only emitted when the target stream is a terminal that can
render them; redirected output and log files stay plain. NO_COLOR in the
environment turns colour off everywhere.
"""

import ctypes
import os
import re
import sys
from typing import Optional, TextIO

ANSI = {
    "reset": "\x1b[0m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "yellow": "\x1b[33m",
    "magenta": "\x1b[35m",
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

# Keyed by the Windows standard handle id (-11 stdout, -12 stderr)
_vt_enabled: dict[int, bool] = {}


def strip_ansi(text: str) -> str:
    return ANSI_REGEX.sub("", text)


def _enable_windows_vt(std_id: int) -> bool:
    """Switch a Windows console handle to VT processing; cached per handle."""
    if std_id in _vt_enabled:
        return _vt_enabled[std_id]

    enabled = False
    if os.environ.get("WT_SESSION") or os.environ.get("TERM", "").startswith("xterm"):
        enabled = True
    else:
        try:
            kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
            handle = kernel32.GetStdHandle(std_id)
            mode = ctypes.c_uint()
            if handle not in (0, -1) and kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
                enabled = bool(kernel32.SetConsoleMode(handle, mode.value | 0x0004))
        except (AttributeError, OSError):
            enabled = False

    _vt_enabled[std_id] = enabled
    return enabled


def supports_color(stream: Optional[TextIO]) -> bool:
    """True if ANSI escapes written to `stream` will render as colour."""
    if stream is None or "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    if not (isatty and isatty()):
        return False
    if os.name != "nt":
        return True
    return _enable_windows_vt(-11 if stream in (sys.stdout, sys.__stdout__) else -12)


def colorize(text: str, *styles: str, stream: Optional[TextIO] = None) -> str:
    """
    Wrap `text` in the given ANSI styles if `stream` (default: sys.stdout)
    can show them, else return it unchanged.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    if not seq or not supports_color(sys.stdout if stream is None else stream):
        return text
    return f"{seq}{text}{ANSI['reset']}"
