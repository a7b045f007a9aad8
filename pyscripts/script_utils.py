# File: pyscripts/script_utils.py
"""
Conventions shared by the pyscripts entry points:

- build_parser(): argparse parser with the common -V/--version flag. Option
  parsing stops at the first positional (argparse.REMAINDER), so unknown
  flags before it are usage errors (exit 2) and anything after it is data.
- run_main(): the single place where ShellToolError becomes an
  "Error: ..." line on stderr plus the error's exit status.
"""

from __future__ import annotations

import argparse
from typing import Callable, List, Optional, Sequence

from cross_platform.debug_utils import configure_from_env
from cross_platform.errors import ShellToolError
from standard_ui import log_error

__version__ = "1.0.0"

EXIT_INTERRUPTED = 130


def build_parser(prog: str, description: str, epilog: Optional[str] = None) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=prog,
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}",
                   help="Show the program name and version, then exit.")
    return p


def strip_separator(tokens: Optional[Sequence[str]]) -> List[str]:
    """Drop the leading '--' that argparse.REMAINDER keeps on some Python versions."""
    tokens = list(tokens or [])
    if tokens and tokens[0] == "--":
        return tokens[1:]
    return tokens


def run_main(func: Callable[[Optional[List[str]]], int], argv: Optional[List[str]] = None) -> int:
    try:
        configure_from_env()
        return func(argv)
    except ShellToolError as e:
        log_error(str(e))
        return e.exit_code
    except ValueError as e:
        # Bad SHELL_TOOLS_LOG_LEVEL and similar environment mistakes.
        log_error(str(e))
        return 1
    except KeyboardInterrupt:
        log_error("Interrupted")
        return EXIT_INTERRUPTED
