#!/usr/bin/env python3
# rlconsole/interface/parser.py
from __future__ import annotations

"""Tokenizing helpers for command lines."""


def tokenize(command_line: str) -> list[str]:
    """
    Split a raw command line on runs of whitespace.

    Empty fields are discarded, so leading and trailing blanks never produce
    tokens. There is no quoting or escaping: 'say "a b"' yields three tokens.
    """
    return command_line.split()
