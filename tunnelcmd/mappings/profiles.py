"""Profile names and the profile to authentication round table."""

from typing import Dict, Tuple

from ..model.auth import CredentialClass, Profile, Side
from ..util import UnknownProfileError

LOCAL = Side.LOCAL
REMOTE = Side.REMOTE

# Authentication rounds per profile, in the order they are offered.
# Identities are filled in later by the connection builder.
PROFILE_AUTH_ROUNDS: Dict[Profile, Tuple[Tuple[Side, CredentialClass], ...]] = {
    Profile.V2_PUB: (
        (LOCAL, CredentialClass.PUBLIC_KEY),
        (REMOTE, CredentialClass.ANY),
    ),
    Profile.V2_EAP: (
        (LOCAL, CredentialClass.EAP),
        (REMOTE, CredentialClass.ANY),
    ),
    Profile.V2_PUB_EAP: (
        (LOCAL, CredentialClass.PUBLIC_KEY),
        (LOCAL, CredentialClass.EAP),
        (REMOTE, CredentialClass.ANY),
    ),
    Profile.V1_PUB: (
        (LOCAL, CredentialClass.PUBLIC_KEY),
        (REMOTE, CredentialClass.PUBLIC_KEY),
    ),
    Profile.V1_XAUTH: (
        (LOCAL, CredentialClass.PUBLIC_KEY),
        (LOCAL, CredentialClass.XAUTH),
        (REMOTE, CredentialClass.PUBLIC_KEY),
    ),
    Profile.V1_XAUTH_PSK: (
        (LOCAL, CredentialClass.PSK),
        (LOCAL, CredentialClass.XAUTH),
        (REMOTE, CredentialClass.PSK),
    ),
    Profile.V1_HYBRID: (
        (LOCAL, CredentialClass.XAUTH),
        (REMOTE, CredentialClass.PUBLIC_KEY),
    ),
}

# Profiles that authenticate locally with our own private key
PRIVATE_KEY_PROFILES = frozenset({
    Profile.V2_PUB,
    Profile.V2_PUB_EAP,
    Profile.V1_PUB,
    Profile.V1_XAUTH,
})

PROFILE_NAMES = tuple(p.value for p in Profile)


def parse_profile(name: str) -> Profile:
    """Map a profile name as given on the command line to a Profile.

    Accepts exactly the hyphenated names, e.g. 'v2-eap' or 'v1-xauth-psk'.
    """
    try:
        return Profile(name)
    except ValueError:
        raise UnknownProfileError(name) from None
