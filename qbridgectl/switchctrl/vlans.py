"""VLAN inventory and VLAN/port membership changes via Q-BRIDGE-MIB."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import chain

from loguru import logger

from qbridgectl.exceptions import PortError, VLANError
from qbridgectl.snmp import oids
from qbridgectl.snmp.portlist import new_portlist, set_port, unset_port
from qbridgectl.snmp.transport import BaseTransport, ValueKind, Varbind
from qbridgectl.snmp.walk import WalkStatus, get_scalar, walk_column
from qbridgectl.switchctrl.models.vlan import Vlan

VLAN_ID_MIN = 1
VLAN_ID_MAX = 4094


def check_vlan_id(vlan_id: int) -> None:
    """Raise :class:`VLANError` unless ``vlan_id`` is a valid 802.1Q VLAN ID."""
    if isinstance(vlan_id, bool) or not isinstance(vlan_id, int) or not VLAN_ID_MIN <= vlan_id <= VLAN_ID_MAX:
        raise VLANError(f"Invalid VLAN ID: {vlan_id!r} (must be {VLAN_ID_MIN}-{VLAN_ID_MAX})")


def check_ports(ports: Iterable[int]) -> list[int]:
    """Return ``ports`` as a list, raising :class:`PortError` on anything but positive ints."""
    result = list(ports)
    for port in result:
        if isinstance(port, bool) or not isinstance(port, int) or port < 1:
            raise PortError(f"Invalid port number: {port!r} (bridge ports start at 1)")
    return result


class VlanManager:
    """VLAN inventory and membership writes over one SNMP session.

    All writes are read-modify-write against the live device and are not
    transactional: every touched VLAN costs two separate SETs (egress, then
    untagged), so a failure part way leaves earlier writes in place.
    """

    def __init__(self, transport: BaseTransport, auto_create_on_write: bool = False):
        self._transport = transport
        self.auto_create_on_write = auto_create_on_write

    # ── inventory ──────────────────────────────────────────────────────

    def list_vlans(self) -> list[Vlan]:
        """Fetch all static VLANs, sorted by VLAN ID.

        Every column of dot1qVlanStaticTable is keyed by VLAN ID, which
        becomes ``Vlan.index``. Agents with an empty static table (e.g. GS108T)
        are read from dot1qVlanCurrentTable instead.
        """
        num_vlans = get_scalar(self._transport, oids.OID_DOT1Q_NUM_VLANS)
        if num_vlans is None:
            raise VLANError(f"{self._transport.host}: dot1qNumVlans not available")

        names = walk_column(
            self._transport, oids.static_vlan_property_oid(oids.VLAN_STATIC_NAME), ValueKind.OCTET_STRING
        ).optional()
        egress_result = walk_column(
            self._transport, oids.static_vlan_property_oid(oids.VLAN_STATIC_EGRESS), ValueKind.OCTET_STRING
        )

        if egress_result.status is WalkStatus.ABSENT:
            logger.debug(f"{self._transport.host}: static VLAN table empty, using current table")
            egress = walk_column(
                self._transport, oids.current_vlan_property_oid(oids.VLAN_CURRENT_EGRESS), ValueKind.OCTET_STRING
            ).optional()
            untagged = walk_column(
                self._transport, oids.current_vlan_property_oid(oids.VLAN_CURRENT_UNTAGGED), ValueKind.OCTET_STRING
            ).optional()
        else:
            egress = egress_result.optional()
            untagged = walk_column(
                self._transport, oids.static_vlan_property_oid(oids.VLAN_STATIC_UNTAGGED), ValueKind.OCTET_STRING
            ).optional()

        # Pad short PortLists to the widest one seen.
        size = max((len(v) for v in chain(egress.values(), untagged.values())), default=0)

        vlans: list[Vlan] = []
        for vlan_id in sorted(set(names) | set(egress) | set(untagged)):
            name = names.get(vlan_id, b"")
            vlans.append(
                Vlan(
                    index=vlan_id,
                    name=name.decode("utf-8", errors="replace") if isinstance(name, bytes) else str(name),
                    egress_ports=bytearray(egress.get(vlan_id, b"").ljust(size, b"\0")),
                    access_ports=bytearray(untagged.get(vlan_id, b"").ljust(size, b"\0")),
                )
            )

        if len(vlans) != num_vlans:
            logger.debug(f"{self._transport.host}: dot1qNumVlans={num_vlans} but {len(vlans)} VLAN rows read")
        return vlans

    def get_vlan(self, vlan_id: int) -> Vlan | None:
        """Return the VLAN with ``vlan_id``, or ``None``."""
        for vlan in self.list_vlans():
            if vlan.index == vlan_id:
                return vlan
        return None

    # ── row lifecycle ──────────────────────────────────────────────────

    def create_vlan(self, vlan_id: int) -> None:
        """Create a static VLAN row (RowStatus createAndGo)."""
        check_vlan_id(vlan_id)
        self._transport.set(
            Varbind(oids.vlan_row_status_oid(vlan_id), ValueKind.INTEGER, oids.ROW_STATUS_CREATE_AND_GO)
        )
        logger.info(f"Created VLAN {vlan_id} on {self._transport.host}")

    def delete_vlan(self, vlan_id: int) -> None:
        """Destroy a static VLAN row (RowStatus destroy)."""
        check_vlan_id(vlan_id)
        self._transport.set(Varbind(oids.vlan_row_status_oid(vlan_id), ValueKind.INTEGER, oids.ROW_STATUS_DESTROY))
        logger.info(f"Deleted VLAN {vlan_id} on {self._transport.host}")

    # ── membership ─────────────────────────────────────────────────────

    def set_port_access(self, ports: Iterable[int], vlan_id: int) -> None:
        """Make ``ports`` untagged members of ``vlan_id``.

        If the VLAN does not exist yet it is created first with an explicit
        createAndGo, unless ``auto_create_on_write`` says the agent creates
        the row by itself on the first PortList write.
        """
        check_vlan_id(vlan_id)
        port_list = check_ports(ports)

        vlan = self.get_vlan(vlan_id)
        if vlan is None:
            port_count = self._bridge_port_count()
            _check_fit(port_list, new_portlist(port_count), vlan_id)
            if not self.auto_create_on_write:
                self.create_vlan(vlan_id)
            vlan = Vlan(index=vlan_id, egress_ports=new_portlist(port_count), access_ports=new_portlist(port_count))
        else:
            _check_fit(port_list, vlan.egress_ports, vlan_id)

        for port in port_list:
            set_port(port - 1, vlan.egress_ports)
            set_port(port - 1, vlan.access_ports)
        self._write_portlists(vlan)
        logger.info(f"Ports {port_list} set to access VLAN {vlan_id}")

    def set_port_trunk(self, ports: Iterable[int], vlan_ids: Iterable[int]) -> None:
        """Add ``ports`` as tagged members of every existing VLAN in ``vlan_ids``."""
        wanted = list(vlan_ids)
        for vlan_id in wanted:
            check_vlan_id(vlan_id)
        port_list = check_ports(ports)

        by_id = {v.index: v for v in self.list_vlans()}
        targets: list[Vlan] = []
        for vlan_id in wanted:
            vlan = by_id.get(vlan_id)
            if vlan is None:
                logger.warning(f"VLAN {vlan_id} does not exist on {self._transport.host}, skipped")
                continue
            _check_fit(port_list, vlan.egress_ports, vlan_id)
            targets.append(vlan)

        for vlan in targets:
            for port in port_list:
                set_port(port - 1, vlan.egress_ports)
            self._write_portlists(vlan)
        logger.info(f"Ports {port_list} set to trunk VLANs {[v.index for v in targets]}")

    def clear_port(self, ports: Iterable[int]) -> None:
        """Remove ``ports`` from every VLAN, tagged and untagged."""
        port_list = check_ports(ports)

        vlans = self.list_vlans()
        for vlan in vlans:
            _check_fit(port_list, vlan.egress_ports, vlan.index)

        for vlan in vlans:
            for port in port_list:
                unset_port(port - 1, vlan.egress_ports)
                unset_port(port - 1, vlan.access_ports)
            self._write_portlists(vlan)
        logger.info(f"Ports {port_list} cleared from {len(vlans)} VLANs")

    def _write_portlists(self, vlan: Vlan) -> None:
        self._transport.set(Varbind(oids.vlan_egress_oid(vlan.index), ValueKind.OCTET_STRING, bytes(vlan.egress_ports)))
        self._transport.set(Varbind(oids.vlan_access_oid(vlan.index), ValueKind.OCTET_STRING, bytes(vlan.access_ports)))
        logger.debug(
            f"VLAN {vlan.index}: egress={bytes(vlan.egress_ports).hex()} untagged={bytes(vlan.access_ports).hex()}"
        )

    def _bridge_port_count(self) -> int:
        count = get_scalar(self._transport, oids.OID_DOT1D_BASE_NUM_PORTS)
        if count is None:
            raise PortError(f"{self._transport.host}: dot1dBaseNumPorts not available")
        return int(count)


def _check_fit(ports: list[int], portlist: bytearray, vlan_id: int) -> None:
    capacity = len(portlist) * 8
    for port in ports:
        if port > capacity:
            raise PortError(f"Port {port} is outside the {capacity}-port PortList of VLAN {vlan_id}")
