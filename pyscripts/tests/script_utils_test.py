# File: tests/script_utils_test.py
import pytest

from cross_platform.errors import CommandFailedError, ToolNotFoundError, ValidationError
from pyscripts.script_utils import EXIT_INTERRUPTED, build_parser, run_main, strip_separator


@pytest.mark.parametrize(
    "tokens, expected",
    [
        (None, []),
        ([], []),
        (["--"], []),
        (["--", "ls", "-l"], ["ls", "-l"]),
        (["ls", "--", "x"], ["ls", "--", "x"]),
    ],
)
def test_strip_separator(tokens, expected):
    assert strip_separator(tokens) == expected


def test_build_parser_has_version(capsys):
    p = build_parser("demo", "Demo tool.")
    with pytest.raises(SystemExit) as excinfo:
        p.parse_args(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "demo 1.0.0"


def test_run_main_passes_argv_and_status():
    seen = []

    def _main(argv):
        seen.append(argv)
        return 4

    assert run_main(_main, ["a", "b"]) == 4
    assert seen == [["a", "b"]]


@pytest.mark.parametrize(
    "error, code, text",
    [
        (ValidationError("No command specified"), 1, "Error: No command specified"),
        (ToolNotFoundError("docker", hint="container control tool"), 1, "docker not found"),
        (CommandFailedError(["xclip", "-i"], 7), 7, "'xclip -i' exited with status 7"),
    ],
)
def test_run_main_maps_tool_errors(capsys, error, code, text):
    def _main(argv):
        raise error

    assert run_main(_main, []) == code
    out, err = capsys.readouterr()
    assert out == ""
    assert text in err


def test_run_main_interrupt(capsys):
    def _main(argv):
        raise KeyboardInterrupt

    assert run_main(_main, []) == EXIT_INTERRUPTED
    assert "Interrupted" in capsys.readouterr().err


def test_run_main_rejects_bad_log_level(monkeypatch, capsys):
    monkeypatch.setenv("SHELL_TOOLS_LOG_LEVEL", "Loud")
    assert run_main(lambda argv: 0, []) == 1
    assert "Error:" in capsys.readouterr().err
