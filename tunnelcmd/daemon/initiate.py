"""One-shot job that assembles the connection and initiates it."""

import logging
from enum import Enum, auto
from typing import Optional

from ..assembly.builder import ConnectionConfigBuilder
from ..assembly.resolver import ProfileResolver
from ..model.connection import ConnectionDescriptor
from ..model.options import ConnectionOptions
from ..util import MissingRequiredFieldError, ResolutionError
from .jobs import JobPriority, JobRequeue
from .shutdown import ShutdownRequest

log = logging.getLogger(__name__)


class JobState(Enum):
    PENDING = auto()
    ASSEMBLING = auto()
    SUBMITTED = auto()
    SUCCESS = auto()
    FAILED = auto()


def log_controller_output(line: str) -> bool:
    """Default initiation callback: log daemon output and keep listening."""
    log.info(line)
    return True


class InitiationJob:
    """Builds the descriptor from the accumulated options and submits it.

    ``controller`` is anything with ``initiate(descriptor, callback) -> bool``.
    Every failure path requests shutdown exactly once and leaves the job in
    FAILED; the job never asks to be requeued.
    """

    priority = JobPriority.CRITICAL

    def __init__(self, options: ConnectionOptions, controller, shutdown: ShutdownRequest,
                 resolver: Optional[ProfileResolver] = None,
                 builder: Optional[ConnectionConfigBuilder] = None,
                 callback=log_controller_output):
        self.options = options
        self.controller = controller
        self.shutdown = shutdown
        self.resolver = resolver or ProfileResolver()
        self.builder = builder or ConnectionConfigBuilder()
        self.callback = callback
        self.state = JobState.PENDING
        self.descriptor: Optional[ConnectionDescriptor] = None
        self._assembled = False

    def cancel(self) -> bool:
        return False

    def _fail(self, reason: str) -> JobRequeue:
        log.error(reason)
        self.state = JobState.FAILED
        self.shutdown.request(reason)
        return JobRequeue.NONE

    def _check_required(self):
        if not self.options.host:
            raise MissingRequiredFieldError("host")
        if not self.options.identity:
            raise MissingRequiredFieldError("identity")

    def assemble(self) -> ConnectionDescriptor:
        """Resolve the profile and build the descriptor.

        Selectors are drained only once resolution succeeded, so nothing is
        consumed on a resolution failure.
        """
        if self._assembled:
            raise RuntimeError("connection already assembled, selectors were drained")
        opts = self.options
        resolution = self.resolver.resolve(opts.profile, opts.key_seen)

        self._assembled = True
        opts.remote_ts.default_if_empty()
        return self.builder.build(
            host=opts.host,
            identity=opts.identity,
            requirements=resolution.requirements,
            local_selectors=opts.local_ts.drain(),
            remote_selectors=opts.remote_ts.drain(),
            version=resolution.version,
            server=opts.server,
        )

    def execute(self) -> JobRequeue:
        if self.state is not JobState.PENDING:
            raise RuntimeError(f"initiation job already executed (state {self.state.name})")

        try:
            self._check_required()
        except MissingRequiredFieldError as e:
            return self._fail(str(e))

        self.state = JobState.ASSEMBLING
        try:
            descriptor = self.assemble()
        except ResolutionError as e:
            return self._fail(str(e))

        self.descriptor = descriptor
        self.state = JobState.SUBMITTED
        log.info(
            f"Initiating {descriptor.name} to {descriptor.ike.remote_address} "
            f"(IKEv{descriptor.version.value})"
        )
        try:
            ok = self.controller.initiate(descriptor, self.callback)
        except Exception as e:
            return self._fail(f"initiating connection to {descriptor.ike.remote_address} failed: {e}")
        if not ok:
            return self._fail(f"initiating connection to {descriptor.ike.remote_address} failed")

        self.state = JobState.SUCCESS
        return JobRequeue.NONE
