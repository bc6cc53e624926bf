"""Interface data models and IF-MIB status enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class AdminStatus(IntEnum):
    """IF-MIB ifAdminStatus."""

    UP = 1
    DOWN = 2
    TESTING = 3


class OperStatus(IntEnum):
    """IF-MIB ifOperStatus."""

    UP = 1
    DOWN = 2
    TESTING = 3
    UNKNOWN = 4
    DORMANT = 5
    NOT_PRESENT = 6
    LOWER_LAYER_DOWN = 7


IF_TYPE_ETHERNET = 6  # IANAifType ethernetCsmacd
IF_TYPE_LAG = 161  # IANAifType ieee8023adLag


@dataclass
class Interface:
    """One switch port or logical interface.

    ``bridge_index`` is the dot1dBasePort number used to address PortLists;
    it is ``0`` for interfaces that are not bridge ports.
    """

    index: int
    bridge_index: int = 0
    label: str = ""
    kind: int = 0
    admin_status: int = 0
    oper_status: int = 0

    @property
    def is_bridge_port(self) -> bool:
        return self.bridge_index > 0

    @property
    def kind_name(self) -> str:
        return {IF_TYPE_ETHERNET: "ethernet", IF_TYPE_LAG: "LAG"}.get(self.kind, "")
