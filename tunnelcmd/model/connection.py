"""Connection descriptor: the fully assembled, immutable IKE/CHILD config."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from .. import defaults
from ..mappings.proposals import Proposal
from .auth import AuthRequirement, IkeVersion
from .selectors import TrafficSelector


class UniquePolicy(str, Enum):
    REPLACE = "replace"


@dataclass(frozen=True)
class Lifetime:
    life: int
    rekey: int
    jitter: int


@dataclass(frozen=True)
class IkeParameters:
    """IKE endpoint and proposal settings."""
    version: IkeVersion
    remote_address: str
    local_port: int
    remote_port: int
    local_address: str = defaults.LOCAL_ADDRESS
    proposals: Tuple[Proposal, ...] = ()
    fragmentation: bool = defaults.FRAGMENTATION


@dataclass(frozen=True)
class ChildPolicy:
    """The single CHILD_SA (data protection policy) of a connection."""
    name: str
    lifetime: Lifetime
    local_ts: Tuple[TrafficSelector, ...]
    remote_ts: Tuple[TrafficSelector, ...]
    proposals: Tuple[Proposal, ...] = ()
    mode: str = "tunnel"
    start_action: str = "none"
    dpd_action: str = "none"
    close_action: str = "none"


@dataclass(frozen=True)
class ConnectionDescriptor:
    name: str
    ike: IkeParameters
    auth: Tuple[AuthRequirement, ...]
    child: ChildPolicy
    virtual_ips: Tuple[str, ...] = (defaults.VIRTUAL_IP_REQUEST,)
    unique: UniquePolicy = UniquePolicy.REPLACE
    cert_policy: str = defaults.CERT_POLICY
    keying_tries: int = defaults.KEYING_TRIES
    rekey_time: int = defaults.IKE_REKEY_TIME
    reauth_time: int = defaults.IKE_REAUTH_TIME
    jitter_time: int = defaults.IKE_JITTER_TIME
    over_time: int = defaults.IKE_OVER_TIME
    mobike: bool = defaults.MOBIKE
    aggressive: bool = defaults.AGGRESSIVE
    dpd_delay: int = defaults.DPD_DELAY
    dpd_timeout: int = defaults.DPD_TIMEOUT

    @property
    def version(self) -> IkeVersion:
        return self.ike.version

    @property
    def local_auth(self) -> Tuple[AuthRequirement, ...]:
        return tuple(a for a in self.auth if a.local)

    @property
    def remote_auth(self) -> Tuple[AuthRequirement, ...]:
        return tuple(a for a in self.auth if not a.local)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.ike.version.value,
            "local_addrs": [self.ike.local_address],
            "local_port": self.ike.local_port,
            "remote_addrs": [self.ike.remote_address],
            "remote_port": self.ike.remote_port,
            "proposals": [str(p) for p in self.ike.proposals],
            "fragmentation": self.ike.fragmentation,
            "vips": list(self.virtual_ips),
            "unique": self.unique.value,
            "send_cert": self.cert_policy,
            "keyingtries": self.keying_tries,
            "rekey_time": self.rekey_time,
            "reauth_time": self.reauth_time,
            "rand_time": self.jitter_time,
            "over_time": self.over_time,
            "mobike": self.mobike,
            "aggressive": self.aggressive,
            "dpd_delay": self.dpd_delay,
            "dpd_timeout": self.dpd_timeout,
            "auth": [
                {
                    "side": a.side.value,
                    "class": a.auth_class.value,
                    "id": a.identity,
                }
                for a in self.auth
            ],
            "children": {
                self.child.name: {
                    "mode": self.child.mode,
                    "life_time": self.child.lifetime.life,
                    "rekey_time": self.child.lifetime.rekey,
                    "rand_time": self.child.lifetime.jitter,
                    "esp_proposals": [str(p) for p in self.child.proposals],
                    "local_ts": [str(ts) for ts in self.child.local_ts],
                    "remote_ts": [str(ts) for ts in self.child.remote_ts],
                    "start_action": self.child.start_action,
                    "dpd_action": self.child.dpd_action,
                    "close_action": self.child.close_action,
                },
            },
        }
