"""LLDP neighbor discovery via the LLDP-MIB remote systems table."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from qbridgectl.discovery.models import Neighbor
from qbridgectl.exceptions import SwitchError
from qbridgectl.snmp import oids
from qbridgectl.snmp.transport import BaseTransport, ValueKind
from qbridgectl.snmp.walk import WalkStatus, walk_column


class LldpNeighborManager:
    """Read the hosts directly plugged into a switch from its lldpRemTable."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def get_neighbors(self) -> dict[int, Neighbor]:
        """Return neighbors keyed by local port number.

        The chassis-id column decides which neighbors exist. Name, port and
        description rows are only attached to neighbors it already produced.
        """
        macs = walk_column(
            self._transport,
            oids.lldp_remote_property_oid(oids.LLDP_REM_CHASSIS_ID),
            ValueKind.OCTET_STRING,
            key=oids.extract_lldp_index,
        )
        if macs.status is WalkStatus.FAILED:
            raise SwitchError(f"error reading neighbor macs: {macs.error}") from macs.error

        nbrs: dict[int, Neighbor] = {
            local_idx: Neighbor(local_if_index=local_idx, remote_mac=mac) for local_idx, mac in macs.rows.items()
        }

        self._fill(nbrs, oids.LLDP_REM_SYS_NAME, lambda n, v: setattr(n, "remote_name", v))
        self._fill(nbrs, oids.LLDP_REM_PORT_ID, lambda n, v: setattr(n, "remote_port_name", v))
        self._fill(nbrs, oids.LLDP_REM_SYS_DESC, lambda n, v: setattr(n, "remote_description", v))

        logger.info(f"{self._transport.host}: {len(nbrs)} LLDP neighbors")
        return nbrs

    def _fill(self, nbrs: dict[int, Neighbor], column: int, assign: Callable[[Neighbor, str], None]) -> None:
        rows = walk_column(
            self._transport,
            oids.lldp_remote_property_oid(column),
            ValueKind.OCTET_STRING,
            key=oids.extract_lldp_index,
        ).optional()
        for local_idx, raw in rows.items():
            nbr = nbrs.get(local_idx)
            if nbr is None:
                logger.debug(f"lldpRemTable column {column} has row for port {local_idx} without chassis id")
                continue
            assign(nbr, raw.decode("utf-8", errors="replace"))
