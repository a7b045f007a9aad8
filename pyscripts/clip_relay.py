#!/usr/bin/env python3
# File: pyscripts/clip_relay.py
"""
Copy a command's output (or stdin) to the clipboard, like `tee` for the clipboard.

The stream is fanned out as it arrives: every chunk goes to the clipboard
tool's stdin and, unless --quiet, to stdout. One trailing newline is held
back and dropped at end of input unless --keep-eol, so what is echoed is
exactly what lands on the clipboard.
"""

from __future__ import annotations

import argparse
import shlex
import subprocess
import sys
from typing import BinaryIO, Iterator, List, Optional

from cross_platform.clipboard_utils import ClipboardBackend, select_backend
from cross_platform.debug_utils import write_debug
from cross_platform.errors import CommandFailedError, CommandNotFoundError, ShellToolError
from pyscripts.script_utils import build_parser, run_main, strip_separator
from standard_ui import log_warning

PROG = "clip-relay"
CHUNK_SIZE = 64 * 1024


class EolTrimmer:
    """Hold back a trailing newline until the stream is known to have ended."""

    def __init__(self, keep_eol: bool = False):
        self.keep_eol = keep_eol
        self._held = False

    def feed(self, chunk: bytes) -> bytes:
        if self.keep_eol or not chunk:
            return chunk
        if self._held:
            chunk = b"\n" + chunk
            self._held = False
        if chunk.endswith(b"\n"):
            self._held = True
            return chunk[:-1]
        return chunk

    def finish(self) -> bytes:
        # A newline still held here was the last byte of input: it is dropped.
        self._held = False
        return b""


class Echo:
    """Console side of the fan-out; stops quietly if the reader goes away."""

    def __init__(self, stream: Optional[BinaryIO]):
        self.stream = stream

    def write(self, data: bytes) -> None:
        if self.stream is None or not data:
            return
        try:
            self.stream.write(data)
            self.stream.flush()
        except BrokenPipeError:
            write_debug("stdout closed; continuing with clipboard only", channel="Debug")
            self.stream = None


def iter_chunks(stream: BinaryIO, size: int = CHUNK_SIZE) -> Iterator[bytes]:
    read = getattr(stream, "read1", None) or stream.read
    while True:
        chunk = read(size)
        if not chunk:
            return
        yield chunk


def pump(source: BinaryIO, sinks, keep_eol: bool) -> int:
    """Copy `source` into every sink, trimming one trailing newline. Returns bytes delivered."""
    trimmer = EolTrimmer(keep_eol)
    total = 0
    for chunk in iter_chunks(source):
        data = trimmer.feed(chunk)
        if not data:
            continue
        for sink in sinks:
            sink.write(data)
        total += len(data)
    tail = trimmer.finish()
    if tail:
        for sink in sinks:
            sink.write(tail)
        total += len(tail)
    return total


def _start_command(command: List[str]) -> subprocess.Popen:
    try:
        return subprocess.Popen(command, stdout=subprocess.PIPE)
    except FileNotFoundError as e:
        raise CommandNotFoundError(command[0]) from e
    except PermissionError as e:
        raise ShellToolError(f"Cannot execute {command[0]}: permission denied") from e


def relay_to_clipboard(
    command: Optional[List[str]],
    keep_eol: bool = False,
    quiet: bool = False,
    backend: Optional[ClipboardBackend] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> int:
    """
    Relay `command`'s stdout (or `stdin` when no command is given) to the clipboard.

    Returns the exit status: the clipboard tool's if it failed, else the
    command's if it failed, else 0.
    """
    backend = backend or select_backend()
    backend.argv()  # fail before running anything if the clipboard tool is missing

    echo = Echo(None if quiet else (stdout or sys.stdout.buffer))
    proc = None
    if command:
        write_debug(f"Running: {shlex.join(command)}", channel="Debug")
        proc = _start_command(command)
        source = proc.stdout
    else:
        source = stdin or sys.stdin.buffer

    cmd_rc = 0
    try:
        sink = backend.open()
        try:
            delivered = pump(source, [sink, echo], keep_eol)
        finally:
            clip_rc = sink.close()
    finally:
        if proc is not None:
            proc.stdout.close()
            cmd_rc = proc.wait()

    write_debug(f"Delivered {delivered} bytes via {sink.argv[0]} (rc={clip_rc})", channel="Debug")
    if clip_rc != 0:
        raise CommandFailedError(sink.argv, clip_rc)
    if cmd_rc != 0:
        log_warning(f"Command '{shlex.join(command)}' exited with status {cmd_rc}")
        return cmd_rc
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    p = build_parser(
        PROG,
        "Copy a command's output, or stdin, to the system clipboard.\n"
        "The content is echoed to stdout as well unless --quiet is given.",
        epilog=(
            "Examples:\n"
            f"  git rev-parse HEAD | {PROG}\n"
            f"  {PROG} -q -- ls -l /tmp\n"
            f"  {PROG} -k cat notes.txt\n\n"
            "Clipboard tools: pbcopy (macOS), clip.exe (Windows, Cygwin, MSYS, WSL),\n"
            "termux-clipboard-set / wl-copy / xclip (Linux), xsel (anything else)."
        ),
    )
    p.add_argument("-k", "--keep-eol", action="store_true",
                   help="Keep the trailing newline instead of trimming one.")
    p.add_argument("-q", "--quiet", action="store_true",
                   help="Do not echo the content to stdout.")
    p.add_argument("command", nargs=argparse.REMAINDER,
                   help="Command to run; its stdout is copied. Reads stdin when omitted.")
    return p


def _main(argv: Optional[List[str]]) -> int:
    args = build_arg_parser().parse_args(argv)
    return relay_to_clipboard(
        strip_separator(args.command) or None,
        keep_eol=args.keep_eol,
        quiet=args.quiet,
    )


def main(argv: Optional[List[str]] = None) -> int:
    return run_main(_main, argv)


if __name__ == "__main__":
    sys.exit(main())
