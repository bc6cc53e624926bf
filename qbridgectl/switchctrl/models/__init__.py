"""Data models for switch management."""

from qbridgectl.switchctrl.models.interface import AdminStatus, Interface, OperStatus
from qbridgectl.switchctrl.models.vlan import Vlan

__all__ = [
    "Interface",
    "AdminStatus",
    "OperStatus",
    "Vlan",
]
