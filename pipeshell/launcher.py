import logging
import subprocess

from pipeshell.errors import LaunchError

logger = logging.getLogger(__name__)


def start_stage(stage):
    """
    Start one stage's process.
    The parent drops its pipe ends right after, the child keeps its own copies.
    """
    try:
        stage.process = subprocess.Popen(
            list(stage.spec.argv),
            stdin=stage.stdin,
            stdout=stage.stdout,
            stderr=stage.stderr,
            close_fds=True,
        )
    except (OSError, ValueError) as e:
        # ValueError: argv with an embedded NUL byte
        raise LaunchError(stage.command, e) from e
    finally:
        stage.release()
    logger.debug("started %s (%r) as pid %d", stage.spec.program, stage.command, stage.process.pid)
    return stage.process


def launch_stages(stages):
    """
    Start stages left to right. Stops at the first one that cannot start;
    the ones after it are released unstarted, the ones before it keep running.
    """
    for idx, stage in enumerate(stages):
        try:
            start_stage(stage)
        except LaunchError:
            for rest in stages[idx + 1:]:
                rest.release()
            raise
    return stages
