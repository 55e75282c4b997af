import logging
import os
import sys

from pipeshell.builtin import execute_builtin
from pipeshell.config import LOG_FORMAT, LOG_LEVEL, PROMPT_NAME
from pipeshell.coordinator import Status
from pipeshell.errors import ShellError
from pipeshell.executor import run_stages
from pipeshell.history import init_readline, load_history, save_history
from pipeshell.parser import Builtin, BuiltinCommand, resolve_command

logger = logging.getLogger(__name__)


def setup_logging(level=LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def prompt():
    """Generate shell prompt"""
    user = os.getenv("USER") or os.getenv("USERNAME") or "user"
    try:
        base = os.path.basename(os.getcwd()) or "/"
    except OSError:
        base = "?"
    return f"{user}@{PROMPT_NAME}:{base}$ "


def report(msg):
    print(f"{PROMPT_NAME}: {msg}", file=sys.stderr)


def run_line(line, streams=None):
    """
    Handle one input line.
    Returns: (keep_running: bool, exit_code: int)
    """
    try:
        cmd = resolve_command(line)
    except ShellError as e:
        report(e)
        return True, 1

    if isinstance(cmd, BuiltinCommand):
        if cmd.name is Builtin.QUIT:
            return False, 0
        return True, execute_builtin(cmd)

    try:
        result = run_stages(cmd.specs, streams)
    except ShellError as e:
        report(e)
        return True, 1

    if result.status is Status.FAILED:
        report(result.failure)
        return True, 1
    if result.status is Status.CANCELLED:
        logger.debug("pipeline cancelled by signal")
    return True, 0


def main_loop(read_line=input):
    """
    Main shell loop.
    Returns: process exit status
    """
    while True:
        try:
            line = read_line(prompt())
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            print()
            continue
        except OSError as e:
            report(f"read command error: {e}")
            return 1

        if not line.strip():
            continue

        keep_running, _ = run_line(line)
        if not keep_running:
            return 0


def main():
    setup_logging()
    init_readline()
    load_history()
    try:
        status = main_loop()
    finally:
        save_history()
    sys.exit(status)
