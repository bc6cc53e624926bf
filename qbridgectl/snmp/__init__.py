"""SNMP plumbing: PortList codec, OID addressing, table walks and the pysnmp session."""

from qbridgectl.snmp.portlist import (
    PortListLengthError,
    decode_portlist,
    encode_portlist,
    is_port_set,
    merge_portlists,
    new_portlist,
    set_port,
    unset_port,
)
from qbridgectl.snmp.session import SnmpSession
from qbridgectl.snmp.transport import BaseTransport, ValueKind, Varbind
from qbridgectl.snmp.walk import WalkResult, WalkStatus, get_scalar, walk_column, walkf

__all__ = [
    "BaseTransport",
    "SnmpSession",
    "ValueKind",
    "Varbind",
    "WalkResult",
    "WalkStatus",
    "walkf",
    "walk_column",
    "get_scalar",
    "PortListLengthError",
    "is_port_set",
    "set_port",
    "unset_port",
    "merge_portlists",
    "new_portlist",
    "decode_portlist",
    "encode_portlist",
]
