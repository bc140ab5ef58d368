"""Accumulated connection options, filled while options are handled."""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from ..mappings.profiles import parse_profile
from .auth import Profile
from .selectors import TrafficSelectorSet

log = logging.getLogger(__name__)


class OptionType(Enum):
    HOST = auto()
    REMOTE_IDENTITY = auto()
    IDENTITY = auto()
    RSA = auto()
    LOCAL_TS = auto()
    REMOTE_TS = auto()
    PROFILE = auto()


@dataclass
class ConnectionOptions:
    host: Optional[str] = None
    server: Optional[str] = None            # remote identity, host if unset
    identity: Optional[str] = None
    key_seen: bool = False
    key_path: Optional[str] = None
    profile: Profile = Profile.UNDEFINED
    local_ts: TrafficSelectorSet = field(default_factory=TrafficSelectorSet.local_side)
    remote_ts: TrafficSelectorSet = field(default_factory=TrafficSelectorSet.remote_side)

    def handle(self, opt: OptionType, arg: Optional[str] = None) -> bool:
        """Apply a single option. Returns False for options not handled here.

        Raises InvalidSelectorError or UnknownProfileError for bad values.
        """
        if opt is OptionType.HOST:
            self.host = arg
        elif opt is OptionType.REMOTE_IDENTITY:
            self.server = arg
        elif opt is OptionType.IDENTITY:
            self.identity = arg
        elif opt is OptionType.RSA:
            self.key_seen = True
            self.key_path = arg
        elif opt is OptionType.LOCAL_TS:
            self.local_ts.add(arg)
        elif opt is OptionType.REMOTE_TS:
            self.remote_ts.add(arg)
        elif opt is OptionType.PROFILE:
            self.profile = parse_profile(arg)
        else:
            return False
        log.debug(f"Handled option {opt.name.lower()}={arg}")
        return True
