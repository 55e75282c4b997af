import sys

import readline

from pipeshell.config import HISTORY_FILE, MAX_HISTORY

KEY_BINDINGS = (
    "set editing-mode emacs",
    r'"\e[A": previous-history',
    r'"\e[B": next-history',
    r'"\e[1;5D": backward-word',
    r'"\e[1;5C": forward-word',
)


def _warn(action, err):
    print(f"Warning: Could not {action} history: {err}", file=sys.stderr)


def init_readline(bindings=KEY_BINDINGS):
    """Line editing is only set up on a terminal. Returns whether it was."""
    if not sys.stdin.isatty():
        return False
    for binding in bindings:
        readline.parse_and_bind(binding)
    return True


def load_history(path=HISTORY_FILE):
    readline.set_history_length(MAX_HISTORY)
    try:
        readline.read_history_file(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        _warn("load", e)


def save_history(path=HISTORY_FILE):
    readline.set_history_length(MAX_HISTORY)
    try:
        readline.write_history_file(path)
    except OSError as e:
        _warn("save", e)


def history_entries():
    """Yield (number, line) for each remembered line, oldest first"""
    for number in range(1, readline.get_current_history_length() + 1):
        yield number, readline.get_history_item(number)


def show_history():
    for number, line in history_entries():
        print(f"{number:>5}  {line}")
