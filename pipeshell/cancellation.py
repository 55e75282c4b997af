"""
Bridge between OS termination signals and a running pipeline.

A fresh subscription is taken for every submitted command line and dropped
before the next prompt, whatever way the pipeline ended.
"""
import contextlib
import logging
import signal
import threading

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGQUIT)


class ExecutionContext:
    """Cancellable handle shared by every waiter of one pipeline"""

    def __init__(self):
        self._event = threading.Event()
        self.signum = None

    def cancel(self, signum=None):
        if not self._event.is_set():
            self.signum = signum
            self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()

    def caused_by_cancel(self, returncode):
        """
        True if an exit status can be explained by the delivered signal:
        killed by a signal, or the shell convention 128 + signum.
        """
        if not self.cancelled:
            return False
        if returncode < 0:
            return True
        return self.signum is not None and returncode == 128 + self.signum


@contextlib.contextmanager
def signal_context(signals=TERMINATION_SIGNALS):
    """
    Install handlers that cancel a new ExecutionContext.
    Previous handlers are always restored on exit.
    Must be used from the main thread.
    """
    ctx = ExecutionContext()

    def handler(signum, frame):
        logger.debug("received %s, cancelling pipeline", signal.Signals(signum).name)
        ctx.cancel(signum)

    previous = {}
    try:
        for sig in signals:
            previous[sig] = signal.signal(sig, handler)
        yield ctx
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old if old is not None else signal.SIG_DFL)
