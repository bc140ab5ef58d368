"""Run a one-shot job once the daemon signals readiness."""

import logging
import threading
from enum import Enum

log = logging.getLogger(__name__)


class JobPriority(Enum):
    CRITICAL = 0


class JobRequeue(Enum):
    NONE = "none"
    FAIR = "fair"


def schedule_on_ready(ready: threading.Event, job) -> threading.Thread:
    """Start a worker that runs ``job.execute()`` once ``ready`` is set.

    The job is executed exactly once, whatever it returns. If ``ready``
    never fires the worker blocks; it is a daemon thread so it does not keep
    the process alive.
    """
    def _worker():
        ready.wait()
        log.debug(f"Daemon ready, running {type(job).__name__} ({job.priority.name})")
        requeue = job.execute()
        if requeue is not JobRequeue.NONE:
            log.warning(f"{type(job).__name__} asked to be requeued ({requeue.value}), ignoring")

    thread = threading.Thread(
        target=_worker,
        name=f"job-{job.priority.name.lower()}",
        daemon=True,
    )
    thread.start()
    return thread
