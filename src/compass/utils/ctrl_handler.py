import logging
import signal

log = logging.getLogger(__name__)


class CtrlCHandler:
    """
    Handle Ctrl+C so sensor delivery stops and session files are flushed
    instead of being cut off mid-write.
    """
    def __init__(self):
        self.should_stop = False
        signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, sig, frame):
        """Callback executed when Ctrl+C is detected"""
        log.info("Interrupt signal detected, closing cleanly...")
        self.should_stop = True
