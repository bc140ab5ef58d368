"""Load connection options from a YAML file."""

import logging
from pathlib import Path
from typing import List, Tuple

import yaml

from ..model.options import OptionType
from ..util import OptionsFileError

log = logging.getLogger(__name__)

# YAML key -> option, same spelling as the long command line options
FILE_KEYS = {
    "host": OptionType.HOST,
    "remote-identity": OptionType.REMOTE_IDENTITY,
    "identity": OptionType.IDENTITY,
    "rsa": OptionType.RSA,
    "local-ts": OptionType.LOCAL_TS,
    "remote-ts": OptionType.REMOTE_TS,
    "profile": OptionType.PROFILE,
}

REPEATABLE = {OptionType.LOCAL_TS, OptionType.REMOTE_TS}


def parse_options_yaml(yaml_text: str) -> List[Tuple[OptionType, str]]:
    """Turn a YAML document into an ordered list of (option, value) pairs.

    Example:
        host: vpn.example.com
        identity: alice@example.com
        remote-ts: [10.1.0.0/16, 10.2.0.0/16]
    """
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise OptionsFileError(f"invalid YAML: {e}") from e
    if data is None:
        return []
    if not isinstance(data, dict):
        raise OptionsFileError("option file must contain a mapping")

    options = []
    for key, value in data.items():
        opt = FILE_KEYS.get(str(key))
        if opt is None:
            raise OptionsFileError(f"unknown option '{key}'")
        if isinstance(value, list):
            if opt not in REPEATABLE:
                raise OptionsFileError(f"option '{key}' takes a single value")
            options.extend((opt, str(v)) for v in value)
        elif value is None:
            raise OptionsFileError(f"option '{key}' has no value")
        else:
            options.append((opt, str(value)))
    return options


def load_options_file(path: Path) -> List[Tuple[OptionType, str]]:
    """Read an option file. A relative ``rsa`` path is taken relative to the file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise OptionsFileError(f"cannot read option file {path}: {e}") from e
    options = [
        (opt, str(path.parent / value)) if opt is OptionType.RSA else (opt, value)
        for opt, value in parse_options_yaml(text)
    ]
    log.debug(f"Loaded {len(options)} option(s) from {path}")
    return options
