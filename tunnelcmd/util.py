"""Error types and logging setup."""

import logging


class TunnelConfigError(Exception):
    """Base class for unrecoverable connection configuration errors."""


class InvalidSelectorError(TunnelConfigError):
    """Raised when a traffic selector string cannot be parsed."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid traffic selector: {value}")


class MissingRequiredFieldError(TunnelConfigError):
    """Raised when a mandatory option (host, identity) was not given."""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"unable to initiate, missing --{option} option")


class OptionsFileError(TunnelConfigError):
    """Raised for unreadable or malformed YAML option files."""


class ResolutionError(TunnelConfigError):
    """Raised when a profile cannot be turned into auth requirements."""


class UnknownProfileError(ResolutionError):
    """Raised for profile names or values outside the known set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown connection profile: {name}")


class MissingCredentialError(ResolutionError):
    """Raised when a profile needs a private key that was not supplied."""

    def __init__(self, profile: str):
        self.profile = profile
        super().__init__(f"missing private key for profile {profile}")


def setup_logging(verbose: bool = False):
    """Configure logging for the client."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
