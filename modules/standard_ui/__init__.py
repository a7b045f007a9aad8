# File: modules/standard_ui/__init__.py
"""
standard_ui package

This package provides a standardized UI layer for console output,
built on Rich: verbosity-gated info messages plus warnings and errors.
"""

from .standard_ui import (
    err_console,
    set_verbose,
    log_info,
    log_warning,
    log_error,
)

__all__ = [
    "err_console",
    "set_verbose",
    "log_info",
    "log_warning",
    "log_error",
]
