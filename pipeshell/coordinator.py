import enum
import logging
import signal
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional, Tuple

from pipeshell.cancellation import TERMINATION_SIGNALS

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StageOutcome:
    index: int
    command: str
    returncode: int

    @property
    def ok(self):
        return self.returncode == 0

    def describe(self):
        if self.returncode < 0:
            try:
                name = signal.Signals(-self.returncode).name
            except ValueError:
                name = str(-self.returncode)
            return f"signal: {name}"
        return f"exit status {self.returncode}"


@dataclass(frozen=True)
class StageFailure:
    command: str
    returncode: int
    reason: str

    def __str__(self):
        return f'wait command "{self.command}" error: {self.reason}'


@dataclass(frozen=True)
class PipelineResult:
    status: Status
    failure: Optional[StageFailure] = None
    outcomes: Tuple[StageOutcome, ...] = ()

    @property
    def ok(self):
        return self.status is Status.SUCCEEDED


def _block_termination_signals():
    # waiter threads never take these signals, the main thread runs the handlers
    signal.pthread_sigmask(signal.SIG_BLOCK, TERMINATION_SIGNALS)


def _wait_stage(index, stage):
    try:
        returncode = stage.process.wait()
    finally:
        stage.release()
    logger.debug("%r exited with %d", stage.command, returncode)
    return StageOutcome(index=index, command=stage.command, returncode=returncode)


def reduce_outcomes(outcomes, context):
    """
    Pick one result out of every stage outcome.
    Failures are ranked by stage order, not by who exited first.
    """
    outcomes = tuple(sorted(outcomes, key=lambda o: o.index))
    failed = [o for o in outcomes if not o.ok]
    if not failed:
        return PipelineResult(Status.SUCCEEDED, outcomes=outcomes)

    genuine = [o for o in failed if not context.caused_by_cancel(o.returncode)]
    if not genuine:
        return PipelineResult(Status.CANCELLED, outcomes=outcomes)

    first = genuine[0]
    failure = StageFailure(command=first.command, returncode=first.returncode, reason=first.describe())
    return PipelineResult(Status.FAILED, failure=failure, outcomes=outcomes)


def wait_for_stages(stages, context):
    """
    Wait for every started stage concurrently, one waiter each.
    Blocks until all of them exited even if some already failed.
    """
    started = [(idx, s) for idx, s in enumerate(stages) if s.started]
    if not started:
        return PipelineResult(Status.SUCCEEDED)

    with ThreadPoolExecutor(
        max_workers=len(started),
        thread_name_prefix="stage-waiter",
        initializer=_block_termination_signals,
    ) as pool:
        futures = [pool.submit(_wait_stage, idx, stage) for idx, stage in started]
        wait(futures)

    outcomes = [f.result() for f in futures]
    result = reduce_outcomes(outcomes, context)
    logger.debug("pipeline %s (cancelled=%s)", result.status.value, context.cancelled)
    return result
