"""YAML renderer for connection descriptors."""

import yaml

from ..model.connection import ConnectionDescriptor


def emit_yaml(desc: ConnectionDescriptor) -> str:
    return yaml.dump(
        {"connections": {desc.name: desc.to_dict()}},
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=120,
    )
