#!/usr/bin/env python3
# File: pyscripts/docker_run_local.py
"""
docker-run-local: run a local executable inside a running container.

Steps:
  1. Resolve the command to an absolute, symlink-free local path.
  2. Pick the destination: --cp-path (anchored at --workdir when relative)
     or <tmpdir>/<run-id>/<name>.
  3. mkdir -p the destination directory, docker cp the file in, chmod +x it.
  4. docker exec it with the remaining arguments, optional user and workdir.

A generated <tmpdir>/<run-id> directory is removed exactly once on every
exit path (success, failure, Ctrl-C, SIGTERM/SIGHUP). An explicit --cp-path
is left in place.

Set DOCKER to use a docker-compatible CLI such as podman.
"""

from __future__ import annotations

import argparse
import atexit
import os
import posixpath
import secrets
import shlex
import shutil
import signal
import subprocess
import sys
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from rich.markup import escape

from cross_platform.debug_utils import write_debug
from cross_platform.errors import CommandFailedError, ToolNotFoundError, ValidationError
from cross_platform.fs_utils import resolve_command
from pyscripts.script_utils import build_parser, run_main, strip_separator
from standard_ui import err_console, log_info, set_verbose

PROG = "docker-run-local"
DEFAULT_TMPDIR = "/tmp"
DOCKER_ENV = "DOCKER"
DEFAULT_DOCKER = "docker"


# ----------------------------
# Data model
# ----------------------------

@dataclass(frozen=True)
class InvocationOptions:
    container: Optional[str]
    command: Tuple[str, ...]
    user: Optional[str] = None
    workdir: Optional[str] = None
    tmpdir: str = DEFAULT_TMPDIR
    cp_path: Optional[str] = None
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "InvocationOptions":
        return cls(
            container=args.container,
            command=tuple(strip_separator(args.command)),
            user=args.docker_user,
            workdir=args.workdir,
            tmpdir=args.tmpdir,
            cp_path=args.cp_path,
            verbose=args.verbose,
        )


@dataclass(frozen=True)
class ResolvedCommand:
    path: str
    name: str
    run_id: str


@dataclass(frozen=True)
class RemotePlacement:
    path: str
    directory: str
    temporary: bool


def validate_options(opts: InvocationOptions) -> None:
    if not opts.container:
        raise ValidationError("No destination docker container name specified (use -c/--container)")
    if not opts.command:
        raise ValidationError("No command specified")
    if opts.workdir and not posixpath.isabs(opts.workdir):
        raise ValidationError(f"--workdir must be an absolute path: {opts.workdir}")
    if opts.cp_path and not posixpath.isabs(opts.cp_path) and not opts.workdir:
        raise ValidationError(f"--cp-path must be an absolute path (or combined with --workdir): {opts.cp_path}")


def make_run_id(prog: str = PROG, now: Optional[datetime] = None, pid: Optional[int] = None) -> str:
    """<prog>-<timestamp>-<pid>-<random>; unique per invocation."""
    now = now or datetime.now()
    pid = os.getpid() if pid is None else pid
    return f"{prog}-{now:%Y%m%d%H%M%S}-{pid}-{secrets.token_hex(4)}"


def compute_placement(opts: InvocationOptions, command: ResolvedCommand) -> RemotePlacement:
    if opts.cp_path:
        path = opts.cp_path
        if not posixpath.isabs(path):
            path = posixpath.join(opts.workdir, path)
        if path.endswith("/"):
            path += command.name
        return RemotePlacement(path=path, directory=posixpath.dirname(path), temporary=False)

    directory = posixpath.join(opts.tmpdir, command.run_id)
    return RemotePlacement(path=posixpath.join(directory, command.name), directory=directory, temporary=True)


# ----------------------------
# Container control
# ----------------------------

class DockerClient:
    """Runs docker commands against one container, echoing them when verbose."""

    def __init__(self, container: str, docker: str = DEFAULT_DOCKER, verbose: bool = False):
        if not shutil.which(docker):
            raise ToolNotFoundError(docker, hint="container control tool")
        self.container = container
        self.docker = docker
        self.verbose = verbose

    def call(self, args: Sequence[str], check: bool = True, quiet: bool = False) -> int:
        argv = [self.docker, *args]
        line = f"+ {shlex.join(argv)}"
        write_debug(line, channel="Debug")
        if self.verbose:
            err_console.print(escape(line), soft_wrap=True)
        streams = {"stdout": subprocess.DEVNULL, "stderr": subprocess.DEVNULL} if quiet else {}
        rc = subprocess.run(argv, check=False, **streams).returncode
        if check and rc != 0:
            raise CommandFailedError(argv, rc)
        return rc

    def exec(self, cmd: Sequence[str], user: Optional[str] = None, workdir: Optional[str] = None,
             interactive: bool = False, tty: bool = False, check: bool = True, quiet: bool = False) -> int:
        args = ["exec"]
        if interactive:
            args.append("-i")
        if tty:
            args.append("-t")
        if user:
            args += ["-u", user]
        if workdir:
            args += ["-w", workdir]
        args += [self.container, *cmd]
        return self.call(args, check=check, quiet=quiet)

    def mkdir(self, path: str) -> None:
        self.exec(["mkdir", "-p", path])

    def copy_in(self, local_path: str, remote_path: str) -> None:
        self.call(["cp", local_path, f"{self.container}:{remote_path}"])

    def make_executable(self, path: str) -> None:
        self.exec(["chmod", "+x", path])

    def remove_tree(self, path: str) -> int:
        return self.exec(["rm", "-rf", path], check=False, quiet=True)


class RemoteTempDir:
    """
    A temporary directory inside the container, removed exactly once.

    Release happens on leaving the `with` block; the atexit hook covers exits
    that skip it. Removal errors are logged and never change the exit status.
    """

    def __init__(self, client: DockerClient, path: str):
        self.client = client
        self.path = path
        self.released = False

    def __enter__(self) -> "RemoteTempDir":
        atexit.register(self.release)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        # Stays registered if release() is interrupted, so atexit retries it.
        self.release()
        atexit.unregister(self.release)
        return False

    def release(self) -> None:
        if self.released:
            return
        try:
            rc = self.client.remove_tree(self.path)
        except OSError as e:
            self.released = True
            write_debug(f"Cleanup of {self.path} failed: {e}", channel="Warning")
            return
        self.released = True
        if rc != 0:
            write_debug(f"Cleanup of {self.path} exited with status {rc}", channel="Warning")


@contextmanager
def exit_on_signals(signums: Optional[Sequence[int]] = None):
    """Turn SIGTERM/SIGHUP into SystemExit so `with`/`finally` cleanup runs."""
    if signums is None:
        signums = [s for s in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if s is not None]

    def _handler(signum, frame):
        raise SystemExit(128 + signum)

    previous = {}
    for signum in signums:
        previous[signum] = signal.signal(signum, _handler)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def _stdio_is_tty() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def run_in_container(opts: InvocationOptions, client: Optional[DockerClient] = None, resolver=None) -> int:
    """Stage opts.command inside the container and run it; returns its exit status."""
    validate_options(opts)
    if client is None:
        client = DockerClient(opts.container, os.environ.get(DOCKER_ENV) or DEFAULT_DOCKER, opts.verbose)

    local_path = resolve_command(opts.command[0], resolver)
    # Keep the name the user typed; multi-call binaries dispatch on argv[0].
    command = ResolvedCommand(
        path=local_path,
        name=os.path.basename(opts.command[0]) or os.path.basename(local_path),
        run_id=make_run_id(),
    )
    placement = compute_placement(opts, command)
    log_info(f"Staging {command.path} as {opts.container}:{placement.path}")

    cleanup = RemoteTempDir(client, placement.directory) if placement.temporary else nullcontext()
    with exit_on_signals(), cleanup:
        client.mkdir(placement.directory)
        client.copy_in(command.path, placement.path)
        client.make_executable(placement.path)
        return client.exec(
            [placement.path, *opts.command[1:]],
            user=opts.user,
            workdir=opts.workdir,
            interactive=True,
            tty=_stdio_is_tty(),
            check=False,
        )


# ----------------------------
# Argument parser
# ----------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    p = build_parser(
        PROG,
        "Copy a local executable into a running container and run it there.",
        epilog=(
            "Examples:\n"
            f"  {PROG} -c web /bin/echo hi\n"
            f"  {PROG} -c web -u www-data -w /srv/app ./scripts/migrate.sh --dry-run\n"
            f"  {PROG} -c web -p /usr/local/bin/ jq --version\n\n"
            "Without --cp-path the command is copied to <tmpdir>/<run-id>/ and that\n"
            "directory is removed when the run ends. Set DOCKER=podman to use podman."
        ),
    )
    p.add_argument("-c", "--container", metavar="NAME", default=None,
                   help="Destination container (required).")
    p.add_argument("-u", "--docker-user", metavar="USER", default=None,
                   help="User or UID to run the command as.")
    p.add_argument("-w", "--workdir", metavar="DIR", default=None,
                   help="Absolute working directory inside the container.")
    p.add_argument("-t", "--tmpdir", metavar="DIR", default=DEFAULT_TMPDIR,
                   help=f"Container temp directory root (default: {DEFAULT_TMPDIR}).")
    p.add_argument("-p", "--cp-path", metavar="PATH", default=None,
                   help="Explicit destination for the copied command; kept after the run.\n"
                        "Relative paths are anchored at --workdir; a trailing '/' appends the command name.")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Echo every docker command before running it.")
    p.add_argument("command", nargs=argparse.REMAINDER,
                   help="Command (path or name on PATH) and its arguments.")
    return p


def _main(argv: Optional[List[str]]) -> int:
    args = build_arg_parser().parse_args(argv)
    opts = InvocationOptions.from_args(args)
    set_verbose(opts.verbose)
    return run_in_container(opts)


def main(argv: Optional[List[str]] = None) -> int:
    return run_main(_main, argv)


if __name__ == "__main__":
    sys.exit(main())
