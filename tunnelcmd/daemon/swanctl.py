"""Connection initiation through the strongSwan swanctl tool."""

import logging
import os
import subprocess
import tempfile
import threading
import time
from typing import Callable, List, Optional, Tuple

from .. import defaults
from ..emitters.swanctl_conf import emit_swanctl
from ..model.connection import ConnectionDescriptor

log = logging.getLogger(__name__)


class SwanctlController:
    """Loads a descriptor into a running charon and initiates it."""

    def __init__(self, command: str = defaults.SWANCTL_COMMAND,
                 timeout: int = defaults.SWANCTL_TIMEOUT):
        self.command = command
        self.timeout = timeout

    def _run(self, args: List[str]) -> Tuple[int, str, str]:
        argv = [self.command] + args
        log.debug(f"Running {' '.join(argv)}")
        try:
            result = subprocess.run(
                argv, capture_output=True, text=True, check=False, timeout=self.timeout,
            )
        except FileNotFoundError:
            return 127, "", f"{self.command}: command not found"
        except OSError as e:
            return 126, "", f"{self.command}: {e}"
        except subprocess.TimeoutExpired:
            return 124, "", f"{' '.join(argv)} timed out after {self.timeout}s"
        return result.returncode, result.stdout, result.stderr

    def probe(self) -> bool:
        """Check that the daemon answers on its control socket."""
        rc, _, stderr = self._run(["--stats"])
        if rc != 0:
            log.debug(f"Daemon not ready: {stderr.strip()}")
        return rc == 0

    def wait_ready(self, ready: threading.Event, timeout: float,
                   interval: float = defaults.READY_POLL_INTERVAL) -> bool:
        """Poll the daemon until it answers, then set ``ready``."""
        deadline = time.time() + timeout
        while True:
            if self.probe():
                ready.set()
                return True
            if time.time() >= deadline:
                return False
            time.sleep(interval)

    @staticmethod
    def _forward(output: str, callback: Optional[Callable[[str], bool]]):
        if callback is None:
            return
        for line in output.splitlines():
            if line.strip():
                callback(line)

    def initiate(self, descriptor: ConnectionDescriptor,
                 callback: Optional[Callable[[str], bool]] = None) -> bool:
        """Load the connection and initiate its CHILD_SA.

        Returns False if loading or initiation fails.
        """
        fd, path = tempfile.mkstemp(prefix="tunnelcmd-", suffix=".conf")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(emit_swanctl(descriptor))

            rc, stdout, stderr = self._run(["--load-conns", "--file", path])
            self._forward(stdout, callback)
            if rc != 0:
                log.error(f"Loading connection '{descriptor.name}' failed: {stderr.strip()}")
                return False

            rc, stdout, stderr = self._run([
                "--initiate", "--ike", descriptor.name, "--child", descriptor.child.name,
            ])
            self._forward(stdout, callback)
            if rc != 0:
                log.error(f"Initiating '{descriptor.name}' failed: {stderr.strip()}")
                return False
            return True
        finally:
            os.unlink(path)
