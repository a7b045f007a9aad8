# __init__.py

# Platform probing
from . import platform_utils
from .platform_utils import detect_platform

# Clipboard backends
from .clipboard_utils import ClipboardBackend, select_backend

# Command and symlink resolution
from .fs_utils import find_command, resolve_command, select_resolver

# Error types
from .errors import (
    ShellToolError,
    ValidationError,
    ToolNotFoundError,
    CommandNotFoundError,
    CommandFailedError,
)

# Debugging and logging utilities
from . import debug_utils

__all__ = [
    "platform_utils",
    "detect_platform",
    "ClipboardBackend",
    "select_backend",
    "find_command",
    "resolve_command",
    "select_resolver",
    "ShellToolError",
    "ValidationError",
    "ToolNotFoundError",
    "CommandNotFoundError",
    "CommandFailedError",
    "debug_utils",
]
