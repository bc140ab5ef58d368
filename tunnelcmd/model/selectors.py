"""Traffic selector models and the per-side selector list."""

import ipaddress
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List

from ..defaults import PORT_MAX, PORT_MIN, REMOTE_TS_DEFAULT
from ..util import InvalidSelectorError

log = logging.getLogger(__name__)


class SelectorKind(Enum):
    RANGE = auto()
    DYNAMIC = auto()        # address assigned during negotiation


@dataclass(frozen=True)
class TrafficSelector:
    kind: SelectorKind
    start: str = ""
    end: str = ""
    from_port: int = PORT_MIN
    to_port: int = PORT_MAX
    protocol: int = 0       # 0 = any protocol

    @classmethod
    def dynamic(cls) -> "TrafficSelector":
        return cls(kind=SelectorKind.DYNAMIC)

    @property
    def is_dynamic(self) -> bool:
        return self.kind is SelectorKind.DYNAMIC

    def covers_all_ports(self) -> bool:
        return self.from_port == PORT_MIN and self.to_port == PORT_MAX

    def to_cidr(self) -> str:
        """Return the selector as CIDR notation, or 'dynamic'.

        Ranges that do not line up on a prefix are returned as 'start-end'.
        """
        if self.is_dynamic:
            return "dynamic"
        nets = list(ipaddress.summarize_address_range(
            ipaddress.ip_address(self.start), ipaddress.ip_address(self.end)))
        if len(nets) == 1:
            return str(nets[0])
        return f"{self.start}-{self.end}"

    def __str__(self) -> str:
        text = self.to_cidr()
        if self.protocol or not self.covers_all_ports():
            text += f"[{self.protocol}/{self.from_port}-{self.to_port}]"
        return text


def parse_selector(value: str) -> TrafficSelector:
    """Parse a CIDR string into a selector covering all ports and protocols.

    Host bits are masked off, bare addresses become host selectors:
        '10.0.0.0/24' -> 10.0.0.0 - 10.0.0.255
        '10.0.0.5/24' -> 10.0.0.0 - 10.0.0.255
        '192.0.2.1'   -> 192.0.2.1 - 192.0.2.1
        'fec1::/16'   -> fec1:: - fec1:ffff:...:ffff
    """
    try:
        net = ipaddress.ip_network(value.strip(), strict=False)
    except (ValueError, TypeError, AttributeError):
        raise InvalidSelectorError(value) from None
    return TrafficSelector(
        kind=SelectorKind.RANGE,
        start=str(net.network_address),
        end=str(net.broadcast_address),
    )


class TrafficSelectorSet:
    """Ordered selectors for one side of the tunnel.

    Filled while options are handled, then drained exactly once when the
    connection is assembled.
    """

    def __init__(self, local: bool, entries: List[TrafficSelector] = None):
        self.local = local
        self._entries: List[TrafficSelector] = list(entries or [])

    @classmethod
    def local_side(cls) -> "TrafficSelectorSet":
        # the virtual IP is always part of the local selectors
        return cls(local=True, entries=[TrafficSelector.dynamic()])

    @classmethod
    def remote_side(cls) -> "TrafficSelectorSet":
        return cls(local=False)

    def add(self, value: str) -> TrafficSelector:
        ts = parse_selector(value)
        self._entries.append(ts)
        log.debug(f"Added {'local' if self.local else 'remote'} traffic selector {ts}")
        return ts

    def default_if_empty(self):
        if not self._entries:
            self._entries.append(parse_selector(REMOTE_TS_DEFAULT))

    def drain(self) -> List[TrafficSelector]:
        """Remove and return all selectors in insertion order."""
        entries, self._entries = self._entries, []
        return entries

    def __len__(self) -> int:
        return len(self._entries)
