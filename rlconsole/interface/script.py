#!/usr/bin/env python3
# rlconsole/interface/script.py
from __future__ import annotations

"""
Script execution.

A script is plain UTF-8 text with one command per line. Lines starting with
'#' are comments. Execution stops at the first command that does not
return OK, and that code becomes the result of the script.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, TextIO

from rlconsole.commands import ReturnCode
from rlconsole.ui import print_line

logger = logging.getLogger(__name__)


class ScriptRunner:
    """Feed the lines of a file to an execute_command callable."""

    def __init__(self, execute: Callable[[str], int], *, stdout: Optional[TextIO] = None) -> None:
        self._execute = execute
        self._stdout = stdout

    def execute_file(self, path: Path | str) -> int:
        try:
            handle = open(path, "r", encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot open script %s: %s", path, exc)
            print_line(
                f"Could not open the script file '{path}' to execute.", file=self._stdout)
            return ReturnCode.ERROR

        counter = 0
        with handle:
            try:
                for raw in handle:
                    line = raw.rstrip("\r\n")
                    if line.startswith("#"):
                        continue
                    # Report what the console is executing
                    print_line(f"[{counter}] {line}", file=self._stdout)
                    result = self._execute(line)
                    if result:
                        logger.debug("Script %s stopped at line %d with code %d", path, counter, result)
                        return result
                    counter += 1
                    print_line(file=self._stdout)
            except UnicodeDecodeError as exc:
                print_line(
                    f"Script '{path}' is not valid UTF-8 text: {exc.reason}", file=self._stdout)
                return ReturnCode.ERROR

        return ReturnCode.OK
