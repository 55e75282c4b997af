"""Tests for splitting command lines into stages and built-ins."""

from __future__ import annotations

import pytest

from pipeshell.errors import ParseError
from pipeshell.parser import (
    Builtin,
    BuiltinCommand,
    CommandSpec,
    ExternalPipeline,
    parse_pipeline,
    resolve_command,
)


def test_single_command_is_one_stage() -> None:
    specs = parse_pipeline("  ls   -la /tmp  ")

    assert specs == [CommandSpec(argv=("ls", "-la", "/tmp"), text="ls   -la /tmp")]
    assert specs[0].program == "ls"


def test_pipes_split_into_trimmed_stages() -> None:
    specs = parse_pipeline("echo hello |cat| wc -l")

    assert [s.argv for s in specs] == [("echo", "hello"), ("cat",), ("wc", "-l")]
    assert [s.text for s in specs] == ["echo hello", "cat", "wc -l"]


@pytest.mark.parametrize("line", ["", "   ", "\t\n"])
def test_empty_line_is_parse_error(line: str) -> None:
    with pytest.raises(ParseError, match="empty command"):
        parse_pipeline(line)


@pytest.mark.parametrize("line", ["ls |", "| wc", "ls || wc", "ls |   | wc"])
def test_empty_stage_is_parse_error(line: str) -> None:
    with pytest.raises(ParseError, match="empty command"):
        parse_pipeline(line)


def test_quotes_are_not_interpreted() -> None:
    specs = parse_pipeline('echo "a b"')

    assert specs[0].argv == ("echo", '"a', 'b"')


def test_parsing_is_idempotent() -> None:
    line = "cat /etc/hosts | grep local | sort -r"

    assert parse_pipeline(line) == parse_pipeline(line)


def test_resolve_builtin_keeps_raw_arguments() -> None:
    cmd = resolve_command("echo  hello   world")

    assert cmd == BuiltinCommand(name=Builtin.ECHO, args=("hello", "world"), raw_args="hello   world")


def test_resolve_exit_is_quit() -> None:
    assert resolve_command("exit").name is Builtin.QUIT
    assert resolve_command("quit").name is Builtin.QUIT


def test_resolve_pipeline_never_runs_builtins() -> None:
    cmd = resolve_command("echo hello | cat")

    assert isinstance(cmd, ExternalPipeline)
    assert [s.program for s in cmd.specs] == ["echo", "cat"]


def test_resolve_unknown_command_is_external() -> None:
    cmd = resolve_command("nosuchprogram123 --flag")

    assert cmd == ExternalPipeline(specs=(CommandSpec(argv=("nosuchprogram123", "--flag"), text="nosuchprogram123 --flag"),))


def test_resolve_empty_line_is_parse_error() -> None:
    with pytest.raises(ParseError):
        resolve_command("")
