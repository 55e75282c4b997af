from __future__ import annotations

import os
import sys
from pathlib import Path

from pipeshell.parser import CommandSpec
from pipeshell.wiring import ShellStreams


def spec(*argv: str) -> CommandSpec:
    return CommandSpec(argv=tuple(argv), text=" ".join(argv))


def py(code: str) -> CommandSpec:
    """Stage running a python snippet, labelled by the snippet itself."""
    return CommandSpec(argv=(sys.executable, "-c", code), text=code)


class CapturedStreams:
    """Shell streams backed by /dev/null and a file, so stage output can be read back."""

    def __init__(self, tmp_path: Path) -> None:
        self.out_path = tmp_path / "stdout"
        self._stdin = os.open(os.devnull, os.O_RDONLY)
        self._stdout = os.open(self.out_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
        self.streams = ShellStreams(stdin=self._stdin, stdout=self._stdout)

    def output(self) -> str:
        return self.out_path.read_text()

    def close(self) -> None:
        os.close(self._stdin)
        os.close(self._stdout)
