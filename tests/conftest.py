"""Shared fixtures for the qbridgectl test suite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from qbridgectl.exceptions import SnmpDeviceError
from qbridgectl.snmp import oids
from qbridgectl.snmp.transport import BaseTransport, ValueKind, Varbind

LLDP_TIME_MARK = 0
LLDP_REM_INDEX = 1


def _oid_key(oid: str) -> tuple[int, ...]:
    return tuple(int(p) for p in oid.split("."))


class FakeSnmpAgent(BaseTransport):
    """In-memory SNMP agent holding one value per OID.

    Walks return rows in OID order. SETs on dot1qVlanStaticRowStatus create
    and destroy static VLAN rows; PortList SETs on a missing VLAN fail with
    ``noCreation`` unless ``auto_create`` is on.
    """

    def __init__(self, host: str = "10.47.1.5", bridge_ports: int = 16, auto_create: bool = False):
        super().__init__(host, "private", 161)
        self.values: dict[str, Varbind] = {}
        self.bridge_ports = bridge_ports
        self.auto_create = auto_create
        self.set_calls: list[Varbind] = []
        self.connected = False
        self.failing_walks: dict[str, Exception] = {}
        self.put_int(oids.OID_DOT1D_BASE_NUM_PORTS, bridge_ports)

    # ── population helpers ─────────────────────────────────────────────

    def put(self, oid: str, kind: ValueKind, value: int | bytes | None) -> None:
        self.values[oid] = Varbind(oid, kind, value)

    def put_int(self, oid: str, value: int) -> None:
        self.put(oid, ValueKind.INTEGER, value)

    def put_bytes(self, oid: str, value: bytes | str) -> None:
        self.put(oid, ValueKind.OCTET_STRING, value.encode() if isinstance(value, str) else value)

    def add_interface(
        self,
        if_index: int,
        descr: str = "",
        bridge_port: int | None = None,
        alias: str | None = None,
        kind: int = 6,
        admin: int = 1,
        oper: int = 1,
    ) -> None:
        self.put_int(f"{oids.interface_property_oid(oids.IF_INDEX)}.{if_index}", if_index)
        self.put_bytes(f"{oids.interface_property_oid(oids.IF_DESCR)}.{if_index}", descr or f"port{if_index}")
        self.put_int(f"{oids.interface_property_oid(oids.IF_TYPE)}.{if_index}", kind)
        self.put_int(f"{oids.interface_property_oid(oids.IF_ADMIN_STATUS)}.{if_index}", admin)
        self.put_int(f"{oids.interface_property_oid(oids.IF_OPER_STATUS)}.{if_index}", oper)
        if alias is not None:
            self.put_bytes(f"{oids.OID_IF_ALIAS}.{if_index}", alias)
        if bridge_port is not None:
            self.put_int(f"{oids.OID_DOT1D_BASE_PORT_IF_INDEX}.{bridge_port}", if_index)
        self.put_int(oids.OID_IF_NUMBER, len(self._rows(oids.interface_property_oid(oids.IF_INDEX))))

    def add_vlan(self, vlan_id: int, name: str = "", egress: bytes | None = None, untagged: bytes | None = None) -> None:
        size = (self.bridge_ports + 7) // 8
        self.put_bytes(f"{oids.static_vlan_property_oid(oids.VLAN_STATIC_NAME)}.{vlan_id}", name)
        self.put_bytes(oids.vlan_egress_oid(vlan_id), egress if egress is not None else bytes(size))
        self.put_bytes(oids.vlan_access_oid(vlan_id), untagged if untagged is not None else bytes(size))
        self.put_int(oids.vlan_row_status_oid(vlan_id), 1)
        self._update_num_vlans()

    def add_neighbor(
        self,
        local_port: int,
        mac: bytes | None = None,
        name: str | None = None,
        port_name: str | None = None,
        description: str | None = None,
    ) -> None:
        suffix = f"{LLDP_TIME_MARK}.{local_port}.{LLDP_REM_INDEX}"
        if mac is not None:
            self.put_bytes(f"{oids.lldp_remote_property_oid(oids.LLDP_REM_CHASSIS_ID)}.{suffix}", mac)
        if name is not None:
            self.put_bytes(f"{oids.lldp_remote_property_oid(oids.LLDP_REM_SYS_NAME)}.{suffix}", name)
        if port_name is not None:
            self.put_bytes(f"{oids.lldp_remote_property_oid(oids.LLDP_REM_PORT_ID)}.{suffix}", port_name)
        if description is not None:
            self.put_bytes(f"{oids.lldp_remote_property_oid(oids.LLDP_REM_SYS_DESC)}.{suffix}", description)

    def vlan_ids(self) -> list[int]:
        return sorted(int(oid.rsplit(".", 1)[1]) for oid in self._rows(oids.static_vlan_property_oid(oids.VLAN_STATIC_ROW_STATUS)))

    def _rows(self, prefix: str) -> list[str]:
        return sorted((oid for oid in self.values if oid.startswith(prefix + ".")), key=_oid_key)

    def _update_num_vlans(self) -> None:
        self.put(oids.OID_DOT1Q_NUM_VLANS, ValueKind.GAUGE, len(self.vlan_ids()))

    def _drop_vlan(self, vlan_id: int) -> None:
        for column in (oids.VLAN_STATIC_NAME, oids.VLAN_STATIC_EGRESS, oids.VLAN_STATIC_UNTAGGED, oids.VLAN_STATIC_ROW_STATUS):
            self.values.pop(f"{oids.static_vlan_property_oid(column)}.{vlan_id}", None)
        self._update_num_vlans()

    # ── BaseTransport ──────────────────────────────────────────────────

    def connect(self) -> None:
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False

    def is_connected(self) -> bool:
        return self.connected

    def get(self, *oid_list: str) -> list[Varbind]:
        return [self.values.get(oid, Varbind(oid, ValueKind.NULL)) for oid in oid_list]

    def walk(self, oid: str) -> list[Varbind]:
        if oid in self.failing_walks:
            raise self.failing_walks[oid]
        return [self.values[row] for row in self._rows(oid)]

    def set(self, *varbinds: Varbind) -> None:
        for vb in varbinds:
            self.set_calls.append(vb)
            column_oid, _, vlan = vb.oid.rpartition(".")
            vlan_id = int(vlan)
            if column_oid == oids.static_vlan_property_oid(oids.VLAN_STATIC_ROW_STATUS):
                if vb.value == oids.ROW_STATUS_CREATE_AND_GO:
                    if vlan_id in self.vlan_ids():
                        raise SnmpDeviceError("inconsistentValue", error_status=12, error_name="inconsistentValue")
                    self.add_vlan(vlan_id)
                elif vb.value == oids.ROW_STATUS_DESTROY:
                    self._drop_vlan(vlan_id)
                continue
            if vlan_id not in self.vlan_ids():
                if not self.auto_create:
                    raise SnmpDeviceError("noCreation", error_status=11, error_name="noCreation", error_index=1)
                self.add_vlan(vlan_id)
            self.values[vb.oid] = vb


@pytest.fixture()
def fake_agent():
    """Factory fixture returning an empty FakeSnmpAgent."""

    def _make(**kwargs):
        return FakeSnmpAgent(**kwargs)

    return _make


@pytest.fixture()
def switch_agent():
    """A 16-port switch with a management interface, two VLANs and one LLDP neighbor."""
    agent = FakeSnmpAgent(bridge_ports=16)
    agent.add_interface(1, "unit 1 port 1 Gigabit - Level", bridge_port=1, alias="uplink")
    agent.add_interface(2, "unit 1 port 2 Gigabit - Level", bridge_port=2, oper=2)
    agent.add_interface(3, "unit 1 port 3 Gigabit - Level", bridge_port=3)
    agent.add_interface(4, "unit 1 port 4 Gigabit - Level", bridge_port=4, admin=2, oper=2)
    agent.add_interface(1000, "CPU Interface", kind=24)
    agent.add_vlan(1, "default", egress=b"\xff\xff", untagged=b"\xff\xff")
    agent.add_vlan(10, "servers", egress=b"\x30\x00", untagged=b"\x10\x00")
    agent.add_neighbor(3, mac=b"\x00\x11\x22\x33\x44\x55", name="node3", port_name="eth0", description="Linux node3")
    return agent


@pytest.fixture()
def mock_transport():
    """MagicMock of BaseTransport with empty get/walk results."""
    transport = MagicMock(spec=BaseTransport)
    transport.host = "10.47.1.5"
    transport.get.return_value = []
    transport.walk.return_value = []
    transport.is_connected.return_value = True
    return transport
