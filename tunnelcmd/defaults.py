"""Fixed negotiation parameters and other constants."""

# Connection and child names handed to the daemon
CONNECTION_NAME = "cmd"
CHILD_NAME = "cmd"

# IKE ports
IKE_PORT = 500
IKE_NATT_PORT = 4500

# Local IKE address, any interface
LOCAL_ADDRESS = "0.0.0.0"

# Virtual IP request, filled in by the responder
VIRTUAL_IP_REQUEST = "0.0.0.0"

# IKE_SA timers (seconds)
KEYING_TRIES = 1
IKE_REKEY_TIME = 36000          # 10h
IKE_REAUTH_TIME = 0             # no reauthentication
IKE_JITTER_TIME = 600           # 10min
IKE_OVER_TIME = 600
DPD_DELAY = 30
DPD_TIMEOUT = 0

# CHILD_SA lifetimes (seconds)
CHILD_LIFE_TIME = 10800         # 3h
CHILD_REKEY_TIME = 10200        # 2h50min
CHILD_JITTER_TIME = 300         # 5min

# Feature switches
MOBIKE = True
AGGRESSIVE = False
FRAGMENTATION = False
CERT_POLICY = "ifasked"

# Full port range used by CIDR selectors
PORT_MIN = 0
PORT_MAX = 65535

# Remote selector used when none is given
REMOTE_TS_DEFAULT = "0.0.0.0/0"

# swanctl invocation
SWANCTL_COMMAND = "swanctl"
SWANCTL_TIMEOUT = 30
READY_POLL_INTERVAL = 0.5
