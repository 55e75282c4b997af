import logging

from pipeshell.cancellation import signal_context
from pipeshell.coordinator import wait_for_stages
from pipeshell.errors import LaunchError
from pipeshell.launcher import launch_stages
from pipeshell.wiring import release_all, wire_stages

logger = logging.getLogger(__name__)


def run_stages(specs, streams=None):
    """
    Wire, launch and wait for a parsed pipeline.
    Returns: PipelineResult
    Raises: WiringError, LaunchError (after reaping whatever already started)
    """
    stages = wire_stages(specs, streams)
    try:
        with signal_context() as ctx:
            try:
                launch_stages(stages)
            except LaunchError:
                result = wait_for_stages(stages, ctx)
                logger.debug("reaped %d stage(s) after launch failure", len(result.outcomes))
                raise
            return wait_for_stages(stages, ctx)
    finally:
        release_all(stages)
