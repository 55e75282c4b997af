import enum
from dataclasses import dataclass
from typing import Tuple, Union

from pipeshell.errors import ParseError

PIPE = "|"


@dataclass(frozen=True)
class CommandSpec:
    """One pipeline stage: program name plus arguments"""
    argv: Tuple[str, ...]
    text: str

    @property
    def program(self):
        return self.argv[0]


class Builtin(enum.Enum):
    CD = "cd"
    PWD = "pwd"
    ECHO = "echo"
    KILL = "kill"
    PS = "ps"
    HISTORY = "history"
    HELP = "help"
    QUIT = "quit"


BUILTIN_NAMES = {b.value: b for b in Builtin}
BUILTIN_NAMES["exit"] = Builtin.QUIT


@dataclass(frozen=True)
class BuiltinCommand:
    name: Builtin
    args: Tuple[str, ...]
    raw_args: str = ""


@dataclass(frozen=True)
class ExternalPipeline:
    specs: Tuple[CommandSpec, ...]


Command = Union[BuiltinCommand, ExternalPipeline]


def parse_pipeline(line):
    """
    Split a command line on '|' into stage specs.
    No quoting or escaping: every stage is split on whitespace.
    Returns: list of CommandSpec
    """
    line = line.strip()
    if not line:
        raise ParseError("empty command")

    specs = []
    for segment in line.split(PIPE):
        text = segment.strip()
        tokens = text.split()
        if not tokens:
            raise ParseError("empty command")
        specs.append(CommandSpec(argv=tuple(tokens), text=text))
    return specs


def resolve_command(line):
    """
    Decide once per line whether it is a built-in or an external pipeline.
    Built-ins only run on their own, never as a pipeline stage.
    """
    line = line.strip()
    if PIPE not in line:
        parts = line.split(None, 1)
        if parts and parts[0] in BUILTIN_NAMES:
            raw_args = parts[1] if len(parts) > 1 else ""
            return BuiltinCommand(
                name=BUILTIN_NAMES[parts[0]],
                args=tuple(raw_args.split()),
                raw_args=raw_args,
            )
    return ExternalPipeline(specs=tuple(parse_pipeline(line)))
