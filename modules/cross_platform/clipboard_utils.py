#!/usr/bin/env python3
# File: modules/cross_platform/clipboard_utils.py

from __future__ import annotations

import codecs
import shutil
import subprocess
from typing import Optional

from . import platform_utils
from .debug_utils import write_debug
from .errors import ToolNotFoundError


class ClipboardSink:
    """
    A running clipboard tool fed through its stdin.

    write() may be called any number of times; close() waits for the tool
    and returns its exit status.
    """

    def __init__(self, argv: list[str]):
        self.argv = argv
        self._proc = subprocess.Popen(argv, stdin=subprocess.PIPE)
        self._broken = False

    def _encode(self, data: bytes, final: bool = False) -> bytes:
        return data

    def _feed(self, payload: bytes) -> None:
        if not payload or self._broken:
            return
        try:
            self._proc.stdin.write(payload)
        except BrokenPipeError:
            # The tool exited early; close() reports its status.
            self._broken = True
            write_debug(f"{self.argv[0]} closed its input early", channel="Warning")

    def write(self, data: bytes) -> None:
        self._feed(self._encode(data))

    def close(self) -> int:
        self._feed(self._encode(b"", final=True))
        try:
            self._proc.stdin.close()
        except BrokenPipeError:
            pass
        return self._proc.wait()


class Utf16ClipboardSink(ClipboardSink):
    """clip.exe reads UTF-16LE; re-encode the UTF-8 stream as it arrives."""

    def __init__(self, argv: list[str]):
        super().__init__(argv)
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def _encode(self, data: bytes, final: bool = False) -> bytes:
        return self._decoder.decode(data, final).encode("utf-16le")


class ClipboardBackend:
    """
    One platform's way of putting bytes on the clipboard.

    Subclasses list candidate tools in preference order; the first one found
    on PATH is used. When none is found, the error names the first candidate so
    the message points at what to install.
    """

    name = "base"
    candidates: tuple = ()
    sink_class = ClipboardSink

    def __init__(self):
        self._argv: Optional[list[str]] = None

    def _candidates(self) -> list[list[str]]:
        return [list(c) for c in self.candidates]

    def argv(self) -> list[str]:
        """Return the clipboard command with its executable resolved, or raise ToolNotFoundError."""
        if self._argv is None:
            candidates = self._candidates()
            for candidate in candidates:
                exe = shutil.which(candidate[0])
                if exe:
                    self._argv = [exe, *candidate[1:]]
                    write_debug(f"Clipboard backend '{self.name}' using {exe}", channel="Debug")
                    break
            else:
                raise ToolNotFoundError(candidates[0][0], hint=f"clipboard tool for {self.name}")
        return self._argv

    def open(self) -> ClipboardSink:
        return self.sink_class(self.argv())


class MacClipboard(ClipboardBackend):
    name = "macOS"
    candidates = (("pbcopy",),)


class WindowsClipboard(ClipboardBackend):
    name = "Windows"
    candidates = (("clip.exe",), ("clip",))
    sink_class = Utf16ClipboardSink


class LinuxClipboard(ClipboardBackend):
    name = "Linux"

    def _candidates(self) -> list[list[str]]:
        found = []
        if platform_utils.is_termux():
            found.append(["termux-clipboard-set"])
        if platform_utils.is_wayland():
            found.append(["wl-copy"])
        found.append(["xclip", "-selection", "clipboard"])
        return found


class SelectionClipboard(ClipboardBackend):
    """Fallback for unrecognized Unix-likes: the X selection via xsel."""

    name = "X selection"
    candidates = (("xsel", "--clipboard", "--input"),)


_BACKENDS = {
    platform_utils.DARWIN: MacClipboard,
    platform_utils.WINDOWS: WindowsClipboard,
    platform_utils.LINUX: LinuxClipboard,
}


def select_backend(platform_name: Optional[str] = None) -> ClipboardBackend:
    """Pick the clipboard backend for this platform (probed once, at startup)."""
    platform_name = platform_name or platform_utils.detect_platform()
    backend = _BACKENDS.get(platform_name, SelectionClipboard)()
    write_debug(f"Platform '{platform_name}' -> clipboard backend '{backend.name}'", channel="Verbose")
    return backend


__all__ = [
    "ClipboardBackend",
    "ClipboardSink",
    "MacClipboard",
    "WindowsClipboard",
    "LinuxClipboard",
    "SelectionClipboard",
    "select_backend",
]
