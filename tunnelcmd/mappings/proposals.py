"""Default crypto proposals for IKE and ESP."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ProposalProtocol(str, Enum):
    IKE = "ike"
    ESP = "esp"


# The daemon expands this keyword into its compiled-in default algorithms
DEFAULT_KEYWORD = "default"


@dataclass(frozen=True)
class Proposal:
    protocol: ProposalProtocol
    algorithms: Tuple[str, ...] = (DEFAULT_KEYWORD,)

    def __str__(self) -> str:
        return "-".join(self.algorithms)


def default_proposal(protocol: ProposalProtocol) -> Proposal:
    """Return the daemon's default proposal for the given protocol.

    The content is opaque here, the daemon resolves it at load time.
    """
    return Proposal(protocol=ProposalProtocol(protocol))
