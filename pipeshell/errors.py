class ShellError(Exception):
    """Base class for errors reported at the prompt"""


class ParseError(ShellError):
    pass


class WiringError(ShellError):
    """Pipe allocation failed before any stage was started"""

    def __init__(self, err):
        super().__init__(f"pipe error: {err}")
        self.err = err


class LaunchError(ShellError):
    """A stage's program could not be started"""

    def __init__(self, command, err):
        super().__init__(f'start command "{command}" error: {err}')
        self.command = command
        self.err = err
