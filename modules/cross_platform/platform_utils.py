# File: modules/cross_platform/platform_utils.py
"""
Platform probing used to pick a strategy once at startup.

detect_platform() collapses the many OS spellings into four families:
  - "darwin"  : macOS
  - "windows" : native Windows and Windows-compatible shells (Cygwin, MSYS, MinGW, WSL)
  - "linux"   : Linux, including Termux
  - "other"   : anything else (BSDs, Solaris, ...)
"""

from __future__ import annotations

import os
import platform
import sys

DARWIN = "darwin"
WINDOWS = "windows"
LINUX = "linux"
OTHER = "other"

_WINDOWS_PREFIXES = ("windows", "cygwin", "msys", "mingw")


def is_wsl() -> bool:
    """Detect WSL (v1 or v2); both report 'Microsoft' in the kernel release."""
    try:
        return "microsoft" in platform.uname().release.lower()
    except Exception:
        return False


def is_termux() -> bool:
    return "TERMUX_VERSION" in os.environ or os.path.isdir("/data/data/com.termux")


def is_wayland() -> bool:
    return bool(os.environ.get("WAYLAND_DISPLAY"))


def detect_platform() -> str:
    system = platform.system().lower()
    if system == "darwin":
        return DARWIN
    if system.startswith(_WINDOWS_PREFIXES) or sys.platform in ("win32", "cygwin", "msys"):
        return WINDOWS
    if system == "linux":
        return WINDOWS if is_wsl() else LINUX
    return OTHER


__all__ = [
    "DARWIN",
    "WINDOWS",
    "LINUX",
    "OTHER",
    "detect_platform",
    "is_wsl",
    "is_termux",
    "is_wayland",
]
