import os

import psutil

from pipeshell.history import show_history
from pipeshell.parser import Builtin


def builtin_help():
    """Print help message"""
    print("""pipeshell help:
 Built-in commands:
  cd [dir]      : change directory
  pwd           : print current directory
  echo <text>   : print text
  kill <pid>... : terminate processes
  ps            : list running processes
  history       : show command history
  help          : print this help
  quit, exit    : exit shell

Features:
  Pipes using |  (cmd1 | cmd2 | ... | cmdN)
""")
    return 0


def builtin_cd(args):
    """Change directory"""
    path = args[0] if args else os.path.expanduser("~")
    try:
        os.chdir(os.path.expanduser(path))
        return 0
    except OSError as e:
        print(f"cd: {e}")
        return 1


def builtin_pwd():
    try:
        print(os.getcwd())
        return 0
    except OSError as e:
        print(f"pwd: {e}")
        return 1


def builtin_echo(raw_args):
    print(raw_args)
    return 0


def builtin_kill(args):
    """Send SIGTERM to every pid given"""
    if not args:
        print("Usage: kill <pid> [pid...]")
        return 1

    status = 0
    for arg in args:
        try:
            psutil.Process(int(arg)).terminate()
            print(f"Process {arg} was killed")
        except ValueError:
            print(f"kill: {arg}: arguments must be process ids")
            status = 1
        except psutil.NoSuchProcess:
            print(f"kill: ({arg}) - No such process")
            status = 1
        except psutil.AccessDenied:
            print(f"kill: ({arg}) - Operation not permitted")
            status = 1
    return status


def builtin_ps():
    """Process list, one line per process"""
    print(f"{'PID':<8} {'Name':<28} {'Status':<10} {'CPU%':>6} {'MEM%':>6}")
    print("-" * 62)
    for p in psutil.process_iter(["pid", "name", "status", "cpu_percent", "memory_percent"]):
        info = p.info
        print(f"{info['pid']:<8} {(info['name'] or '?')[:26]:<28} {info['status'] or '?':<10} "
              f"{info['cpu_percent'] or 0.0:6.2f} {info['memory_percent'] or 0.0:6.2f}")
    return 0


def builtin_history():
    """Show command history"""
    show_history()
    return 0


def execute_builtin(cmd):
    """
    Run a resolved built-in command.
    Returns: exit code. QUIT is handled by the main loop.
    """
    handlers = {
        Builtin.CD: lambda: builtin_cd(cmd.args),
        Builtin.PWD: builtin_pwd,
        Builtin.ECHO: lambda: builtin_echo(cmd.raw_args),
        Builtin.KILL: lambda: builtin_kill(cmd.args),
        Builtin.PS: builtin_ps,
        Builtin.HISTORY: builtin_history,
        Builtin.HELP: builtin_help,
    }
    handler = handlers.get(cmd.name)
    if handler is None:
        raise ValueError(f"not an executable builtin: {cmd.name.value}")
    return handler()
