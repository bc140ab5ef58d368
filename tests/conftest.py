"""Shared fixtures."""

import pytest

from tunnelcmd.assembly.builder import ConnectionConfigBuilder
from tunnelcmd.assembly.resolver import ProfileResolver
from tunnelcmd.model.auth import Profile
from tunnelcmd.model.selectors import TrafficSelectorSet


@pytest.fixture()
def make_descriptor():
    """Build a descriptor the way the initiation job does."""

    def _make(profile=Profile.V2_EAP, has_key=False, remote_ts=(), local_ts=(),
              host="vpn.example.com", identity="alice@example.com", server=None):
        resolution = ProfileResolver().resolve(profile, has_key)
        local = TrafficSelectorSet.local_side()
        for value in local_ts:
            local.add(value)
        remote = TrafficSelectorSet.remote_side()
        for value in remote_ts:
            remote.add(value)
        remote.default_if_empty()
        return ConnectionConfigBuilder().build(
            host=host,
            identity=identity,
            requirements=resolution.requirements,
            local_selectors=local.drain(),
            remote_selectors=remote.drain(),
            version=resolution.version,
            server=server,
        )

    return _make
