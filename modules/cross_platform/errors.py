# File: modules/cross_platform/errors.py
"""Error types shared by the shell tools.

Every error carries the exit status the calling script should end with.
"""

from __future__ import annotations

import shlex
from typing import Sequence


class ShellToolError(Exception):
    exit_code = 1


class ValidationError(ShellToolError):
    """Missing or malformed options, detected before any external call."""


class ToolNotFoundError(ShellToolError):
    def __init__(self, tool: str, hint: str = ""):
        self.tool = tool
        message = f"{tool} not found"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class CommandNotFoundError(ShellToolError):
    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Command not found: {command}")


class CommandFailedError(ShellToolError):
    """An external process exited non-zero; its status becomes ours."""

    def __init__(self, cmd: Sequence[str], returncode: int):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.exit_code = returncode
        super().__init__(f"'{shlex.join(self.cmd)}' exited with status {returncode}")


__all__ = [
    "ShellToolError",
    "ValidationError",
    "ToolNotFoundError",
    "CommandNotFoundError",
    "CommandFailedError",
]
