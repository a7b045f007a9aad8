#!/usr/bin/env python3
# File: pyscripts/print_args.py
"""
Print each argument on its own line, cycling through a fixed color palette.

Whitespace-only arguments are printed as-is so blank lines never carry
escape codes. Colors are only emitted when stdout is a terminal (or when
FORCE_COLOR is set); NO_COLOR always wins.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Iterable, Iterator, List, Optional, TextIO

from pyscripts.script_utils import build_parser, run_main, strip_separator

PROG = "print-args"

RESET = "\033[0m"
PALETTE = (
    "\033[31m",  # red
    "\033[32m",  # green
    "\033[33m",  # yellow
    "\033[34m",  # blue
    "\033[35m",  # magenta
    "\033[36m",  # cyan
    "\033[37m",  # white
)


class ColorCycle:
    """Rotating palette position; one slot is consumed per argument printed."""

    def __init__(self, palette=PALETTE):
        self.palette = tuple(palette)
        self.index = 0

    def next(self) -> str:
        color = self.palette[self.index % len(self.palette)]
        self.index += 1
        return color


def colors_enabled(stream: TextIO, environ=None) -> bool:
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return False
    if env.get("FORCE_COLOR"):
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def format_args(args: Iterable[str], use_color: bool, cycle: Optional[ColorCycle] = None) -> Iterator[str]:
    """Yield one output line per argument."""
    cycle = cycle or ColorCycle()
    for arg in args:
        # Blank arguments still advance the rotation.
        color = cycle.next()
        if not use_color or not arg.strip():
            yield arg
        else:
            yield f"{color}{arg}{RESET}"


def build_arg_parser() -> argparse.ArgumentParser:
    p = build_parser(
        PROG,
        "Print each argument on its own line in rotating colors.",
        epilog=(
            "Examples:\n"
            f"  {PROG} one two three\n"
            f"  {PROG} -- --looks-like-a-flag\n"
            f"  {PROG} \"$PATH\" | cat   # piped: plain text"
        ),
    )
    p.add_argument("args", nargs=argparse.REMAINDER, help="Arguments to print.")
    return p


def print_args(args: List[str], stream: Optional[TextIO] = None) -> int:
    stream = stream or sys.stdout
    use_color = colors_enabled(stream)
    for line in format_args(args, use_color):
        stream.write(line + "\n")
    stream.flush()
    return 0


def _main(argv: Optional[List[str]]) -> int:
    ns = build_arg_parser().parse_args(argv)
    return print_args(strip_separator(ns.args))


def main(argv: Optional[List[str]] = None) -> int:
    return run_main(_main, argv)


if __name__ == "__main__":
    sys.exit(main())
