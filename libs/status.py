"""
Start/end progress reporting for long running steps
"""
from contextlib import contextmanager
from typing import Optional
from .logger import get_logger
logger = get_logger(__name__)


class Status:
    """Reports the start and end of a step; a step ends exactly once"""
    def __init__(self, log=None):
        self._log = log or logger
        self._message: Optional[str] = None
        self.success: Optional[bool] = None

    @property
    def active(self) -> bool:
        """Whether a step has started and not ended yet"""
        return self._message is not None

    def start(self, message: str):
        """Begin reporting a step, ending any step still running as successful"""
        if self.active:
            self.end(True)
        self._message = message
        self.success = None
        self._log.info(" • %s ...", message)

    def end(self, success: bool):
        """End the current step; no-op when nothing is running"""
        if not self.active:
            return
        if success:
            self._log.info(" ✓ %s", self._message)
        else:
            self._log.error(" ✗ %s", self._message)
        self.success = success
        self._message = None

    @contextmanager
    def running(self, message: str):
        """
        Report message for the duration of the block
        The step ends as failed unless end(True) was called inside the block.
        """
        self.start(message)
        try:
            yield self
        finally:
            self.end(False)
