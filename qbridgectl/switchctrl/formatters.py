"""Terminal and switchmac formatters for switch inventory."""

from __future__ import annotations

from tabulate import tabulate

from qbridgectl.discovery.models import Neighbor
from qbridgectl.switchctrl.models.interface import AdminStatus, Interface, OperStatus
from qbridgectl.switchctrl.models.vlan import Vlan

CONTROL_VLAN = 2003


def status_str(code: int, enum: type[AdminStatus] | type[OperStatus]) -> str:
    """Convert an IF-MIB status code to a short name, e.g. ``1 -> 'up'``."""
    try:
        return enum(code).name.lower().replace("_", "-")
    except ValueError:
        return f"?({code})"


def format_port_range(ports: list[int]) -> str:
    """Format port numbers into compact ranges.

    E.g. [1, 2, 3, 5, 8, 9] -> '1-3, 5, 8-9'
    """
    if not ports:
        return "-"
    nums = sorted(set(ports))
    ranges: list[tuple[int, int]] = []
    start = end = nums[0]
    for n in nums[1:]:
        if n == end + 1:
            end = n
        else:
            ranges.append((start, end))
            start = end = n
    ranges.append((start, end))
    return ", ".join(str(s) if s == e else f"{s}-{e}" for s, e in ranges)


class TerminalFormatter:
    """Format interfaces, VLANs and neighbors as plain-text tables."""

    def __init__(
        self,
        interfaces: list[Interface] | None = None,
        vlans: list[Vlan] | None = None,
        neighbors: dict[int, Neighbor] | None = None,
        tablefmt: str = "simple",
    ) -> None:
        self.interfaces = interfaces or []
        self.vlans = vlans or []
        self.neighbors = neighbors or {}
        self.tablefmt = tablefmt

    def format_interfaces(self) -> str:
        rows = [
            [
                ifx.index,
                ifx.bridge_index or "-",
                ifx.label,
                ifx.kind_name or ifx.kind,
                status_str(ifx.admin_status, AdminStatus),
                status_str(ifx.oper_status, OperStatus),
            ]
            for ifx in self.interfaces
        ]
        return tabulate(rows, headers=["ifIndex", "Port", "Label", "Type", "Admin", "Oper"], tablefmt=self.tablefmt)

    def format_vlans(self) -> str:
        rows = [
            [
                v.index,
                v.name,
                format_port_range(v.access_port_numbers()),
                format_port_range(v.tagged_port_numbers()),
            ]
            for v in self.vlans
        ]
        return tabulate(rows, headers=["VLAN", "Name", "Access ports", "Trunk ports"], tablefmt=self.tablefmt)

    def format_neighbors(self) -> str:
        rows = [
            [n.local_if_index, n.remote_name, n.remote_port_name, n.mac_address, n.remote_description]
            for _, n in sorted(self.neighbors.items())
        ]
        return tabulate(
            rows, headers=["Local port", "Remote name", "Remote port", "MAC", "Description"], tablefmt=self.tablefmt
        )

    def format(self) -> str:
        """Return the complete ``show`` output as a string."""
        sections = [
            ("Interfaces", self.format_interfaces()),
            ("Vlans", self.format_vlans()),
            ("Neighbors", self.format_neighbors()),
        ]
        lines: list[str] = []
        for title, body in sections:
            lines.append(f"\n{title}")
            lines.append("=" * len(title))
            lines.append(body)
        return "\n".join(lines)


class SwitchMacFormatter:
    """Format neighbors as ``<mac>,<switch>/<module>.<port>,<vlan>,<interface>,<class>`` lines."""

    def __init__(self, host: str, node_class: str, control_vlan: int = CONTROL_VLAN) -> None:
        self.host = host
        self.node_class = node_class
        self.control_vlan = control_vlan

    def format_line(self, nbr: Neighbor) -> str:
        return (
            f"{nbr.mac_hex},{self.host}/0.{nbr.local_if_index},{self.control_vlan},"
            f"{nbr.remote_name}:{nbr.remote_port_name},{self.node_class}"
        )

    def format(self, neighbors: dict[int, Neighbor]) -> str:
        return "\n".join(self.format_line(n) for _, n in sorted(neighbors.items()))
