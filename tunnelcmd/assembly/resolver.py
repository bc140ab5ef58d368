"""Resolve the requested profile into ordered authentication requirements."""

import logging
from dataclasses import dataclass
from typing import Tuple

from ..mappings.profiles import PRIVATE_KEY_PROFILES, PROFILE_AUTH_ROUNDS
from ..model.auth import AuthRequirement, IkeVersion, Profile
from ..util import MissingCredentialError, UnknownProfileError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    profile: Profile
    requirements: Tuple[AuthRequirement, ...]

    @property
    def version(self) -> IkeVersion:
        return self.profile.version


class ProfileResolver:
    """Turns a (possibly undefined) profile into a validated list of auth rounds."""

    def default_profile(self, has_private_key: bool) -> Profile:
        """A key implies public key auth, no key implies EAP."""
        return Profile.V2_PUB if has_private_key else Profile.V2_EAP

    def resolve(self, requested: Profile, has_private_key: bool) -> Resolution:
        """
        Resolve a profile.

        Args:
            requested: Profile asked for, Profile.UNDEFINED to pick a default
            has_private_key: Whether a local private key was supplied

        Returns:
            Resolution with the concrete profile and its auth rounds

        Raises:
            MissingCredentialError: the profile needs a private key
            UnknownProfileError: the profile has no auth table entry
        """
        profile = requested
        if profile is Profile.UNDEFINED:
            profile = self.default_profile(has_private_key)
            log.debug(f"No profile given, using {profile.value}")

        if profile in PRIVATE_KEY_PROFILES and not has_private_key:
            raise MissingCredentialError(profile.value)

        rounds = PROFILE_AUTH_ROUNDS.get(profile)
        if rounds is None:
            raise UnknownProfileError(getattr(profile, "value", str(profile)))

        requirements = tuple(
            AuthRequirement(side=side, auth_class=auth_class)
            for side, auth_class in rounds
        )
        log.debug(
            f"Profile {profile.value} resolved to "
            f"[{', '.join(str(r) for r in requirements)}]"
        )
        return Resolution(profile=profile, requirements=requirements)
