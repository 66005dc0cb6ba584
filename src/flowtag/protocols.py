"""IANA protocol number -> name resolution backed by dpkt's IP_PROTO_* table."""
from __future__ import annotations

import dpkt

_PREFIX = "IP_PROTO_"


def _build_protocol_names() -> dict[str, str]:
    names: dict[str, str] = {}
    # several constants alias one number (IP/HOPOPTS, RAW/RESERVED/MAX);
    # the first definition in dpkt.ip wins
    for attr, value in vars(dpkt.ip).items():
        if attr.startswith(_PREFIX) and isinstance(value, int):
            names.setdefault(str(value), attr[len(_PREFIX):].lower())
    return names


PROTOCOL_NAMES = _build_protocol_names()


def resolve_protocol(protocol: str) -> str:
    """Return the protocol name for a numeric field, or the field unchanged."""
    if protocol.isdecimal():
        return PROTOCOL_NAMES.get(str(int(protocol)), protocol)
    return protocol
