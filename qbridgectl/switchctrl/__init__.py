"""Switch control: VLAN/port management via Q-BRIDGE-MIB over SNMP."""

from qbridgectl.switchctrl.client import SnmpSwitch
from qbridgectl.switchctrl.interfaces import InterfaceManager
from qbridgectl.switchctrl.models import AdminStatus, Interface, OperStatus, Vlan
from qbridgectl.switchctrl.vlans import VlanManager

__all__ = [
    "SnmpSwitch",
    "InterfaceManager",
    "VlanManager",
    "Interface",
    "AdminStatus",
    "OperStatus",
    "Vlan",
]
