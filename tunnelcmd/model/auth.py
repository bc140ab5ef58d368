"""Authentication profile and credential data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IkeVersion(Enum):
    V1 = 1
    V2 = 2


class Profile(str, Enum):
    """Supported combinations of IKE version and credential classes."""
    UNDEFINED = "undefined"
    V2_PUB = "v2-public-key"
    V2_EAP = "v2-eap"
    V2_PUB_EAP = "v2-public-key-and-eap"
    V1_PUB = "v1-public-key"
    V1_XAUTH = "v1-xauth"
    V1_XAUTH_PSK = "v1-xauth-psk"
    V1_HYBRID = "v1-hybrid"

    @property
    def version(self) -> IkeVersion:
        if self.value.startswith("v1-"):
            return IkeVersion.V1
        return IkeVersion.V2


class CredentialClass(str, Enum):
    PUBLIC_KEY = "public-key"
    PSK = "pre-shared-key"
    EAP = "eap"
    XAUTH = "xauth"
    ANY = "any"             # remote only: accept whatever the peer offers


class Side(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class AuthRequirement:
    """One authentication round, applied in list order."""
    side: Side
    auth_class: CredentialClass
    identity: Optional[str] = None

    @property
    def local(self) -> bool:
        return self.side is Side.LOCAL

    def __str__(self) -> str:
        return f"{self.side.value}:{self.auth_class.value}"
