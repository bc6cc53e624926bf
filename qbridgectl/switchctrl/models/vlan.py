"""VLAN data model."""

from __future__ import annotations

from dataclasses import dataclass, field

from qbridgectl.snmp.portlist import decode_portlist


@dataclass
class Vlan:
    """An 802.1Q VLAN as seen in dot1qVlanStaticTable.

    ``egress_ports`` holds every port that forwards the VLAN (trunk
    membership), ``access_ports`` the subset that sends it untagged.
    """

    index: int
    name: str = ""
    egress_ports: bytearray = field(default_factory=bytearray)
    access_ports: bytearray = field(default_factory=bytearray)

    def egress_port_numbers(self) -> list[int]:
        return sorted(decode_portlist(self.egress_ports))

    def access_port_numbers(self) -> list[int]:
        return sorted(decode_portlist(self.access_ports))

    def tagged_port_numbers(self) -> list[int]:
        """Egress ports that carry the VLAN tagged."""
        untagged = decode_portlist(self.access_ports)
        return [p for p in self.egress_port_numbers() if p not in untagged]
