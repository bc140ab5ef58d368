"""Shutdown requests from background work to the owning process."""

import logging
import threading
from typing import Optional

log = logging.getLogger(__name__)


class ShutdownRequest:
    """Fire-and-forget request to stop the client.

    Only the first request is recorded; the main thread waits on it and
    turns it into a non-zero exit status.
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self.reason: Optional[str] = None

    def request(self, reason: str) -> bool:
        with self._lock:
            if self._event.is_set():
                log.debug(f"Ignoring repeated shutdown request: {reason}")
                return False
            self.reason = reason
            self._event.set()
        log.debug(f"Shutdown requested: {reason}")
        return True

    @property
    def requested(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)
