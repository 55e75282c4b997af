import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from pipeshell.errors import WiringError
from pipeshell.parser import CommandSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShellStreams:
    """Streams of the shell itself. None means inherit."""
    stdin: Optional[int] = None
    stdout: Optional[int] = None
    stderr: Optional[int] = None


@dataclass
class Stage:
    spec: CommandSpec
    stdin: Optional[int] = None
    stdout: Optional[int] = None
    stderr: Optional[int] = None
    process: object = None
    # pipe ends the parent still holds for this stage
    owned_fds: List[int] = field(default_factory=list)

    @property
    def command(self):
        return self.spec.text

    @property
    def started(self):
        return self.process is not None

    def release(self):
        """Close the parent's copies of this stage's pipe ends. Safe to call twice."""
        while self.owned_fds:
            fd = self.owned_fds.pop()
            try:
                os.close(fd)
            except OSError as e:
                logger.debug("close fd %d for %r: %s", fd, self.command, e)


def wire_stages(specs, streams=None):
    """
    Bind every spec to a Stage and connect neighbours with os.pipe().
    Returns: list of Stage, nothing started yet
    """
    if not specs:
        raise ValueError("no stages to wire")
    streams = streams or ShellStreams()

    pipes = []
    try:
        for _ in range(len(specs) - 1):
            pipes.append(os.pipe())
    except OSError as e:
        for r, w in pipes:
            os.close(r)
            os.close(w)
        raise WiringError(e) from e

    stages = []
    last = len(specs) - 1
    for idx, spec in enumerate(specs):
        stage = Stage(spec=spec, stderr=streams.stderr)

        if idx == 0:
            stage.stdin = streams.stdin
        else:
            stage.stdin = pipes[idx - 1][0]
            stage.owned_fds.append(stage.stdin)

        if idx == last:
            stage.stdout = streams.stdout
        else:
            stage.stdout = pipes[idx][1]
            stage.owned_fds.append(stage.stdout)

        stages.append(stage)

    logger.debug("wired %d stage(s) with %d pipe(s)", len(stages), len(pipes))
    return stages


def release_all(stages):
    for stage in stages:
        stage.release()
