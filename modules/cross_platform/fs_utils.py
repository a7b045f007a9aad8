# File: modules/cross_platform/fs_utils.py
"""
cross_platform.fs_utils

Resolve a command name or path to an absolute, symlink-free local file.

Highlights
- Path resolution is a strategy picked once per process by select_resolver():
  native realpath on Linux-like systems, external tools elsewhere.
- resolve_command() accepts either an existing file or a name found on PATH.

Design
- Functions return plain strings; callers decide how to print.
- Failures raise cross_platform.errors types so scripts map them to exit codes.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from typing import Optional, Sequence

from . import platform_utils
from .debug_utils import write_debug
from .errors import CommandFailedError, CommandNotFoundError, ToolNotFoundError


# ------------------------------
# Resolvers
# ------------------------------

class RealpathResolver:
    """Direct link resolution; what `readlink -f` does on Linux."""

    name = "realpath"

    def resolve(self, path: str) -> str:
        return os.path.realpath(path)


class ExternalToolResolver:
    """Delegate to an external tool such as `greadlink -f` or `realpath`."""

    def __init__(self, argv: Sequence[str]):
        self.argv = list(argv)
        self.name = os.path.basename(self.argv[0])

    def resolve(self, path: str) -> str:
        try:
            result = subprocess.run(
                [*self.argv, path],
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise CommandFailedError(e.cmd, e.returncode) from e
        return result.stdout.rstrip("\n")


# Tried in order on systems without reliable native link resolution.
EXTERNAL_RESOLVERS = (
    ("greadlink", "-f"),
    ("realpath",),
)


def select_resolver(platform_name: Optional[str] = None):
    """
    Pick the path resolver for this platform.

    Raises:
        ToolNotFoundError: on non-Linux systems where none of the external
        resolution tools is installed.
    """
    platform_name = platform_name or platform_utils.detect_platform()
    if platform_name == platform_utils.LINUX:
        return RealpathResolver()
    for candidate in EXTERNAL_RESOLVERS:
        exe = shutil.which(candidate[0])
        if exe:
            write_debug(f"Resolving symlinks with {exe}", channel="Verbose")
            return ExternalToolResolver([exe, *candidate[1:]])
    tried = ", ".join(c[0] for c in EXTERNAL_RESOLVERS)
    raise ToolNotFoundError("symlink resolution tool", hint=f"tried {tried}")


# ------------------------------
# Commands
# ------------------------------

def find_command(command: str) -> str:
    """
    Return `command` if it names an existing file, else its location on PATH.

    Raises:
        CommandNotFoundError: if neither applies.
    """
    if os.path.isfile(command):
        return command
    # Names containing a separator are paths; PATH lookup would not apply.
    if os.sep not in command and (os.altsep is None or os.altsep not in command):
        found = shutil.which(command)
        if found:
            return found
    raise CommandNotFoundError(command)


def resolve_command(command: str, resolver=None) -> str:
    """Absolute, symlink-free path of `command` (a file path or a name on PATH)."""
    located = find_command(command)
    resolver = resolver or select_resolver()
    resolved = resolver.resolve(os.path.abspath(located))
    write_debug(f"Resolved '{command}' -> {resolved} ({resolver.name})", channel="Debug")
    return resolved


__all__ = [
    "RealpathResolver",
    "ExternalToolResolver",
    "select_resolver",
    "find_command",
    "resolve_command",
]
