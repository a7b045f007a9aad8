# File: modules/cross_platform/tests/fs_utils_test.py
import os
import shutil
import subprocess
from pathlib import Path

import pytest

from cross_platform.errors import CommandFailedError, CommandNotFoundError, ToolNotFoundError
from cross_platform.fs_utils import (
    ExternalToolResolver,
    RealpathResolver,
    find_command,
    resolve_command,
    select_resolver,
)


def _which_map(mapping):
    return lambda name: mapping.get(name)


@pytest.fixture()
def tool(tmp_path: Path) -> Path:
    p = tmp_path / "bin" / "tool"
    p.parent.mkdir()
    p.write_text("#!/bin/sh\necho tool\n")
    p.chmod(0o755)
    return p


def test_find_command_existing_file(tool: Path):
    assert find_command(str(tool)) == str(tool)


def test_find_command_on_path(monkeypatch):
    monkeypatch.setattr(shutil, "which", _which_map({"jq": "/usr/bin/jq"}))
    assert find_command("jq") == "/usr/bin/jq"


def test_find_command_missing(monkeypatch):
    monkeypatch.setattr(shutil, "which", _which_map({}))
    with pytest.raises(CommandNotFoundError) as excinfo:
        find_command("definitely-not-here")
    assert "Command not found: definitely-not-here" in str(excinfo.value)


def test_find_command_path_like_is_not_looked_up(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(shutil, "which", _which_map({str(tmp_path / "nope"): "/usr/bin/nope"}))
    with pytest.raises(CommandNotFoundError):
        find_command(str(tmp_path / "nope"))


def test_resolve_command_follows_symlinks(tool: Path, tmp_path: Path):
    link = tmp_path / "link-to-tool"
    os.symlink(tool, link)
    assert resolve_command(str(link), RealpathResolver()) == os.path.realpath(tool)


def test_resolve_command_relative_path_becomes_absolute(tool: Path, monkeypatch):
    monkeypatch.chdir(tool.parent.parent)
    resolved = resolve_command(os.path.join("bin", "tool"), RealpathResolver())
    assert os.path.isabs(resolved)
    assert resolved == os.path.realpath(tool)


def test_select_resolver_linux_is_native():
    assert isinstance(select_resolver("linux"), RealpathResolver)


def test_select_resolver_prefers_greadlink(monkeypatch):
    monkeypatch.setattr(shutil, "which", _which_map({
        "greadlink": "/opt/homebrew/bin/greadlink",
        "realpath": "/bin/realpath",
    }))
    resolver = select_resolver("darwin")
    assert isinstance(resolver, ExternalToolResolver)
    assert resolver.argv == ["/opt/homebrew/bin/greadlink", "-f"]


def test_select_resolver_falls_back_to_realpath(monkeypatch):
    monkeypatch.setattr(shutil, "which", _which_map({"realpath": "/bin/realpath"}))
    assert select_resolver("windows").argv == ["/bin/realpath"]


def test_select_resolver_without_tools_fails(monkeypatch):
    monkeypatch.setattr(shutil, "which", _which_map({}))
    with pytest.raises(ToolNotFoundError) as excinfo:
        select_resolver("darwin")
    assert "greadlink" in str(excinfo.value)


def test_external_resolver_runs_tool(monkeypatch):
    seen = {}

    def fake_run(argv, capture_output, text, check):
        seen["argv"] = argv
        return subprocess.CompletedProcess(argv, 0, "/usr/local/Cellar/jq/bin/jq\n", "")

    monkeypatch.setattr(subprocess, "run", fake_run)
    resolver = ExternalToolResolver(["/bin/greadlink", "-f"])
    assert resolver.resolve("/usr/local/bin/jq") == "/usr/local/Cellar/jq/bin/jq"
    assert seen["argv"] == ["/bin/greadlink", "-f", "/usr/local/bin/jq"]


def test_external_resolver_failure(monkeypatch):
    def fake_run(argv, **kwargs):
        raise subprocess.CalledProcessError(2, argv)

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(CommandFailedError) as excinfo:
        ExternalToolResolver(["/bin/realpath"]).resolve("/x")
    assert excinfo.value.exit_code == 2
