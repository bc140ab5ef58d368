"""Assemble a ConnectionDescriptor from resolved inputs."""

import dataclasses
import logging
from typing import Callable, Iterable, Optional, Sequence

from .. import defaults
from ..mappings.proposals import Proposal, ProposalProtocol, default_proposal
from ..model.auth import AuthRequirement, IkeVersion
from ..model.connection import (
    ChildPolicy, ConnectionDescriptor, IkeParameters, Lifetime, UniquePolicy,
)
from ..model.selectors import TrafficSelector

log = logging.getLogger(__name__)


class ConfiguredPorts:
    """Port query for a daemon bound to known ports."""

    def __init__(self, port: int = defaults.IKE_PORT, natt_port: int = defaults.IKE_NATT_PORT):
        self.port = port
        self.natt_port = natt_port

    def get_port(self, nat_t: bool = False) -> int:
        return self.natt_port if nat_t else self.port


def select_remote_port(local_port: int) -> int:
    """Use the NAT-T port remotely unless we are bound to the IKE port ourselves."""
    if local_port != defaults.IKE_PORT:
        return defaults.IKE_NATT_PORT
    return defaults.IKE_PORT


class ConnectionConfigBuilder:
    """Builds the immutable descriptor handed to the daemon.

    ``ports`` is anything with ``get_port(nat_t)``, ``proposal_factory``
    maps a ProposalProtocol to a Proposal.
    """

    def __init__(self, ports=None,
                 proposal_factory: Callable[[ProposalProtocol], Proposal] = default_proposal):
        self.ports = ports or ConfiguredPorts()
        self.proposal_factory = proposal_factory

    def build(self, host: str, identity: str,
              requirements: Sequence[AuthRequirement],
              local_selectors: Iterable[TrafficSelector],
              remote_selectors: Iterable[TrafficSelector],
              version: IkeVersion,
              server: Optional[str] = None) -> ConnectionDescriptor:
        local_port = self.ports.get_port(False)
        remote_port = select_remote_port(local_port)

        ike = IkeParameters(
            version=version,
            remote_address=host,
            local_port=local_port,
            remote_port=remote_port,
            proposals=(self.proposal_factory(ProposalProtocol.IKE),),
        )

        remote_id = server or host
        auth = tuple(
            dataclasses.replace(req, identity=identity if req.local else remote_id)
            for req in requirements
        )

        child = ChildPolicy(
            name=defaults.CHILD_NAME,
            lifetime=Lifetime(
                life=defaults.CHILD_LIFE_TIME,
                rekey=defaults.CHILD_REKEY_TIME,
                jitter=defaults.CHILD_JITTER_TIME,
            ),
            local_ts=tuple(local_selectors),
            remote_ts=tuple(remote_selectors),
            proposals=(self.proposal_factory(ProposalProtocol.ESP),),
        )

        descriptor = ConnectionDescriptor(
            name=defaults.CONNECTION_NAME,
            ike=ike,
            auth=auth,
            child=child,
            virtual_ips=(defaults.VIRTUAL_IP_REQUEST,),
            unique=UniquePolicy.REPLACE,
        )
        log.debug(
            f"Built IKEv{version.value} connection to {host}:{remote_port} "
            f"(local port {local_port}) with {len(auth)} auth round(s), "
            f"{len(child.local_ts)} local / {len(child.remote_ts)} remote selector(s)"
        )
        return descriptor
