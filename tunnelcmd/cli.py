"""CLI entry point and orchestration logic."""

import argparse
import logging
import sys
import threading
from pathlib import Path

from . import __version__
from .assembly.builder import ConfiguredPorts, ConnectionConfigBuilder
from .daemon.initiate import InitiationJob
from .daemon.jobs import schedule_on_ready
from .daemon.shutdown import ShutdownRequest
from .daemon.swanctl import SwanctlController
from .defaults import IKE_PORT, SWANCTL_COMMAND, SWANCTL_TIMEOUT
from .emitters.swanctl_conf import emit_swanctl
from .emitters.yaml_dump import emit_yaml
from .mappings.profiles import PROFILE_NAMES
from .model.options import ConnectionOptions, OptionType
from .parser.options_file import load_options_file
from .util import TunnelConfigError, setup_logging

log = logging.getLogger(__name__)

EMITTERS = {
    "swanctl": emit_swanctl,
    "yaml": emit_yaml,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tunnelcmd",
        description="Set up a single IKE connection through a running charon daemon.",
    )
    p.add_argument("--host", help="DNS name or address to connect to")
    p.add_argument(
        "--remote-identity", dest="remote_identity",
        help="Server identity to expect (default: --host)",
    )
    p.add_argument("--identity", help="Identity the client uses for authentication")
    p.add_argument(
        "--rsa", metavar="PATH",
        help="RSA private key to use for public key authentication",
    )
    p.add_argument(
        "--local-ts", dest="local_ts", action="append", default=[], metavar="CIDR",
        help="Additional local traffic selector (repeatable)",
    )
    p.add_argument(
        "--remote-ts", dest="remote_ts", action="append", default=[], metavar="CIDR",
        help="Remote traffic selector (repeatable, default: 0.0.0.0/0)",
    )
    p.add_argument(
        "--profile", metavar="NAME",
        help=f"Authentication profile, one of: {', '.join(PROFILE_NAMES)}",
    )
    p.add_argument(
        "-c", "--config", type=Path, default=None,
        help="YAML file with connection options (command line wins)",
    )
    p.add_argument(
        "--local-port", dest="local_port", type=int, default=IKE_PORT,
        help=f"IKE port the daemon is bound to (default: {IKE_PORT})",
    )
    p.add_argument("--swanctl", default=SWANCTL_COMMAND, help="Path to the swanctl binary")
    p.add_argument(
        "--timeout", type=int, default=SWANCTL_TIMEOUT,
        help=f"Seconds to wait for the daemon (default: {SWANCTL_TIMEOUT})",
    )
    p.add_argument(
        "--dry-run", dest="dry_run", action="store_true",
        help="Print the assembled connection instead of initiating it",
    )
    p.add_argument(
        "--format", choices=sorted(EMITTERS), default="swanctl",
        help="Output format for --dry-run (default: swanctl)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    p.add_argument("--version", action="version", version=f"tunnelcmd {__version__}")
    return p


def collect_options(args: argparse.Namespace) -> ConnectionOptions:
    """Apply option file entries, then command line options.

    Raises TunnelConfigError for any invalid value.
    """
    options = ConnectionOptions()

    if args.config:
        for opt, value in load_options_file(args.config):
            options.handle(opt, value)

    scalars = [
        (OptionType.HOST, args.host),
        (OptionType.REMOTE_IDENTITY, args.remote_identity),
        (OptionType.IDENTITY, args.identity),
        (OptionType.RSA, args.rsa),
        (OptionType.PROFILE, args.profile),
    ]
    for opt, value in scalars:
        if value is not None:
            options.handle(opt, value)
    for value in args.local_ts:
        options.handle(OptionType.LOCAL_TS, value)
    for value in args.remote_ts:
        options.handle(OptionType.REMOTE_TS, value)

    if options.key_path and not Path(options.key_path).exists():
        raise TunnelConfigError(f"private key file not found: {options.key_path}")
    return options


class PrintController:
    """Stands in for the daemon on --dry-run: prints instead of initiating."""

    def __init__(self, fmt: str = "swanctl", stream=None):
        self.emit = EMITTERS[fmt]
        self.stream = stream or sys.stdout

    def initiate(self, descriptor, callback=None) -> bool:
        self.stream.write(self.emit(descriptor))
        return True


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        options = collect_options(args)
    except TunnelConfigError as e:
        log.error(str(e))
        sys.exit(1)

    shutdown = ShutdownRequest()
    builder = ConnectionConfigBuilder(ports=ConfiguredPorts(args.local_port))
    if args.dry_run:
        controller = PrintController(args.format)
    else:
        controller = SwanctlController(args.swanctl, args.timeout)
    job = InitiationJob(options, controller, shutdown, builder=builder)

    ready = threading.Event()
    worker = schedule_on_ready(ready, job)

    if args.dry_run:
        ready.set()
    elif not controller.wait_ready(ready, args.timeout):
        log.error(f"charon daemon not reachable via {args.swanctl} after {args.timeout}s")
        shutdown.request("daemon not ready")

    if ready.is_set():
        worker.join()

    if shutdown.requested:
        log.debug(f"Exiting after failure: {shutdown.reason}")
        sys.exit(1)
