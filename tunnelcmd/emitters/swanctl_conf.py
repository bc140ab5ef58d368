"""swanctl.conf renderer for connection descriptors."""

from typing import Iterable, List

from ..model.auth import AuthRequirement, CredentialClass
from ..model.connection import ConnectionDescriptor

INDENT = "    "

# Credential class -> swanctl 'auth' keyword. ANY is expressed by leaving
# 'auth' unset on the remote round.
AUTH_KEYWORDS = {
    CredentialClass.PUBLIC_KEY: "pubkey",
    CredentialClass.PSK: "psk",
    CredentialClass.EAP: "eap",
    CredentialClass.XAUTH: "xauth",
    CredentialClass.ANY: None,
}


def _fmt(value) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _address(addr: str) -> str:
    return "%any" if addr in ("0.0.0.0", "::") else addr


def _join(values: Iterable) -> str:
    return ", ".join(str(v) for v in values)


class _Writer:
    def __init__(self):
        self.lines: List[str] = []
        self.depth = 0

    def open(self, name: str):
        self.lines.append(f"{INDENT * self.depth}{name} {{")
        self.depth += 1

    def close(self):
        self.depth -= 1
        self.lines.append(f"{INDENT * self.depth}}}")

    def set(self, key: str, value):
        self.lines.append(f"{INDENT * self.depth}{key} = {_fmt(value)}")


def _emit_auth_rounds(w: _Writer, prefix: str, rounds: Iterable[AuthRequirement]):
    for num, req in enumerate(rounds, start=1):
        w.open(f"{prefix}-{num}")
        keyword = AUTH_KEYWORDS[req.auth_class]
        if keyword:
            w.set("auth", keyword)
        if req.identity:
            w.set("id", req.identity)
        w.close()


def emit_swanctl(desc: ConnectionDescriptor) -> str:
    """Render the descriptor as a swanctl.conf 'connections' section."""
    w = _Writer()
    w.open("connections")
    w.open(desc.name)

    w.set("version", desc.version.value)
    w.set("local_addrs", _address(desc.ike.local_address))
    w.set("local_port", desc.ike.local_port)
    w.set("remote_addrs", desc.ike.remote_address)
    w.set("remote_port", desc.ike.remote_port)
    w.set("proposals", _join(desc.ike.proposals))
    w.set("vips", _join(desc.virtual_ips))
    w.set("unique", desc.unique.value)
    w.set("send_cert", desc.cert_policy)
    w.set("keyingtries", desc.keying_tries)
    w.set("rekey_time", f"{desc.rekey_time}s")
    w.set("reauth_time", f"{desc.reauth_time}s")
    w.set("rand_time", f"{desc.jitter_time}s")
    w.set("over_time", f"{desc.over_time}s")
    w.set("mobike", desc.mobike)
    w.set("aggressive", desc.aggressive)
    w.set("fragmentation", desc.ike.fragmentation)
    w.set("dpd_delay", f"{desc.dpd_delay}s")
    w.set("dpd_timeout", f"{desc.dpd_timeout}s")

    _emit_auth_rounds(w, "local", desc.local_auth)
    _emit_auth_rounds(w, "remote", desc.remote_auth)

    child = desc.child
    w.open("children")
    w.open(child.name)
    w.set("mode", child.mode)
    w.set("life_time", f"{child.lifetime.life}s")
    w.set("rekey_time", f"{child.lifetime.rekey}s")
    w.set("rand_time", f"{child.lifetime.jitter}s")
    w.set("esp_proposals", _join(child.proposals))
    w.set("local_ts", _join(child.local_ts))
    w.set("remote_ts", _join(child.remote_ts))
    w.set("start_action", child.start_action)
    w.set("dpd_action", child.dpd_action)
    w.set("close_action", child.close_action)
    w.close()
    w.close()

    w.close()
    w.close()
    return "\n".join(w.lines) + "\n"
