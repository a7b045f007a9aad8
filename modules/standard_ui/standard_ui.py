"""
standard_ui.py

A standardized UI layer for console output across the shell tools.
Built on Rich, it provides:
  - Standard logging functions: log_info, log_warning, log_error.
  - A verbosity switch (set_verbose) that gates log_info.

Messages go to stderr so they never mix with a tool's own output. Rich drops
color codes by itself when the stream is not a terminal, and honors NO_COLOR.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# ---------- Console + Theme ----------

_THEME = Theme(
    {
        "ui.info": "cyan",
        "ui.warn": "yellow bold",
        "ui.error": "red bold",
    }
)

err_console = Console(theme=_THEME, highlight=False, stderr=True)

# ---------- Global State ----------

VERBOSE = False


def set_verbose(verbose: bool) -> None:
    """Set global verbosity. If False, log_info is suppressed."""
    global VERBOSE
    VERBOSE = bool(verbose)


# ---------- Basic Logging ----------


def log_info(message: str) -> None:
    """Info is suppressed unless VERBOSE is True."""
    if VERBOSE:
        err_console.print(f"[ui.info]{escape(message)}[/]", soft_wrap=True)


def log_warning(message: str) -> None:
    err_console.print(f"[ui.warn]Warning:[/] {escape(message)}", soft_wrap=True)


def log_error(message: str) -> None:
    err_console.print(f"[ui.error]Error:[/] {escape(message)}", soft_wrap=True)
