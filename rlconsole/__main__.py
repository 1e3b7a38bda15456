#!/usr/bin/env python3
# rlconsole/__main__.py
from __future__ import annotations
"""
Command-line entry point.

Runs a single console configured from config files and RLCONSOLE_*
environment variables. Command-line options override the configuration.
With --script the file is executed and the process exits; otherwise the
console reads lines until 'quit', 'exit' or end of input.
"""

import argparse
import sys
from typing import Optional, Sequence

from rlconsole.commands import ReturnCode
from rlconsole.config import load_config
from rlconsole.interface import ENGINE_NAMES, Console, HistoryManager, make_engine
from rlconsole.ui import colorize, init_logger, print_line


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rlconsole", description="Interactive command console.")
    parser.add_argument("--prompt", help="prompt shown before each line")
    parser.add_argument("--script", metavar="FILE",
                        help="execute FILE and exit instead of reading from the terminal")
    parser.add_argument("--history-file", metavar="PATH",
                        help="load and save history in PATH")
    parser.add_argument("--engine", choices=ENGINE_NAMES,
                        help="line editing backend")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug output to stderr")
    return parser


def _echo(tokens: Sequence[str]) -> int:
    """Print the arguments back."""
    print_line(" ".join(tokens[1:]))
    return ReturnCode.OK


def exit_status(code: int) -> int:
    """Map a console return code to a process exit status (0..255)."""
    if code in (ReturnCode.OK, ReturnCode.QUIT):
        return 0
    # POSIX keeps only the low byte
    return min(max(int(code), 1), 255)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        config = load_config()
    except ValueError as exc:
        print_line(
            colorize(f"[ WARN ] Invalid configuration: {exc}", "yellow", stream=sys.stderr),
            file=sys.stderr)
        return 2

    level = "DEBUG" if args.verbose else (config.log_level or "WARNING")
    logfile = str(config.log_file_path) if config.log_file_path else None
    logger = init_logger("rlconsole", level=level, logfile=logfile)

    engine_name = args.engine or config.engine
    manager = HistoryManager(engine_factory=lambda: make_engine(engine_name))
    history_file = args.history_file or config.history_file_path
    prompt = args.prompt if args.prompt is not None else config.prompt

    with Console(
        prompt,
        history=manager,
        history_file=history_file,
        history_length=config.history_length,
        enable_completion=config.enable_completion,
    ) as console:
        console.register("echo", _echo)

        if args.script:
            result = console.execute_file(args.script)
            logger.debug("Script %s finished with code %d", args.script, result)
            return exit_status(result)

        print_line(colorize("Type 'help' to list commands, 'quit' to leave.", "dim"))
        return exit_status(console.interact())


if __name__ == "__main__":
    sys.exit(main())
