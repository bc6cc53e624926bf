"""Tests for terminal and switchmac formatters."""

import pytest

from qbridgectl.discovery.models import Neighbor
from qbridgectl.switchctrl.formatters import (
    CONTROL_VLAN,
    SwitchMacFormatter,
    TerminalFormatter,
    format_port_range,
    status_str,
)
from qbridgectl.switchctrl.models import AdminStatus, Interface, OperStatus, Vlan


@pytest.fixture()
def neighbors():
    return {
        7: Neighbor(local_if_index=7, remote_mac=b"\x00\x11\x22\x33\x44\x55", remote_name="node7", remote_port_name="eth1"),
        3: Neighbor(local_if_index=3, remote_mac=b"\xaa\xbb\xcc\xdd\xee\xff", remote_name="node3", remote_port_name="eth0"),
    }


class TestHelpers:
    """status_str and format_port_range."""

    def test_status_str(self):
        assert status_str(1, AdminStatus) == "up"
        assert status_str(2, OperStatus) == "down"
        assert status_str(7, OperStatus) == "lower-layer-down"

    def test_unknown_status(self):
        assert status_str(0, OperStatus) == "?(0)"

    @pytest.mark.parametrize(
        "ports,expected",
        [
            ([], "-"),
            ([4], "4"),
            ([1, 2, 3, 5, 8, 9], "1-3, 5, 8-9"),
            ([9, 1, 2, 2], "1-2, 9"),
        ],
    )
    def test_format_port_range(self, ports, expected):
        assert format_port_range(ports) == expected


class TestTerminalFormatter:
    """Plain-text tables."""

    def test_interfaces(self):
        out = TerminalFormatter(
            interfaces=[Interface(index=1, bridge_index=1, label="port 1", kind=6, admin_status=1, oper_status=2)]
        ).format_interfaces()
        assert "ifIndex" in out
        assert "port 1" in out
        assert "ethernet" in out
        assert "down" in out

    def test_vlans(self):
        vlan = Vlan(index=10, name="servers", egress_ports=bytearray(b"\xf0\x00"), access_ports=bytearray(b"\xc0\x00"))
        out = TerminalFormatter(vlans=[vlan]).format_vlans()
        assert "servers" in out
        assert "1-2" in out
        assert "3-4" in out

    def test_neighbors_sorted_by_port(self, neighbors):
        out = TerminalFormatter(neighbors=neighbors).format_neighbors()
        assert out.index("node3") < out.index("node7")
        assert "aa:bb:cc:dd:ee:ff" in out

    def test_show_sections(self):
        out = TerminalFormatter().format()
        assert "Interfaces\n==========" in out
        assert "Vlans\n=====" in out
        assert "Neighbors\n=========" in out


class TestSwitchMacFormatter:
    """switchmac line format."""

    def test_format_line(self, neighbors):
        line = SwitchMacFormatter("10.47.1.5", "experimental").format_line(neighbors[3])
        assert line == f"aabbccddeeff,10.47.1.5/0.3,{CONTROL_VLAN},node3:eth0,experimental"

    def test_format_sorted(self, neighbors):
        out = SwitchMacFormatter("sw1", "control", control_vlan=100).format(neighbors)
        assert out.splitlines() == [
            "aabbccddeeff,sw1/0.3,100,node3:eth0,control",
            "001122334455,sw1/0.7,100,node7:eth1,control",
        ]

    def test_empty(self):
        assert SwitchMacFormatter("sw1", "control").format({}) == ""
