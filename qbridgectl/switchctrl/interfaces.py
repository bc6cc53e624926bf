"""Interface inventory. Joins IF-MIB and BRIDGE-MIB tables into Interface records."""

from __future__ import annotations

from typing import Any

from loguru import logger

from qbridgectl.snmp import oids
from qbridgectl.snmp.transport import BaseTransport, ValueKind
from qbridgectl.snmp.walk import get_scalar, walk_column
from qbridgectl.switchctrl.models.interface import Interface


class InterfaceManager:
    """Read-only interface inventory over one SNMP session."""

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    def list_interfaces(self) -> list[Interface]:
        """Fetch all interfaces, in the order the agent lists them in ifTable.

        Every column is joined on the ifIndex carried in its row OID. The
        bridge port table maps dot1dBasePort (row key) to ifIndex (value);
        interfaces it does not mention keep ``bridge_index == 0``.
        """
        num_ifx = get_scalar(self._transport, oids.OID_IF_NUMBER)
        if not num_ifx:
            logger.debug(f"{self._transport.host}: ifNumber absent or zero")
            return []

        index_rows = walk_column(
            self._transport, oids.interface_property_oid(oids.IF_INDEX), ValueKind.INTEGER
        ).require("ifIndex")
        by_index: dict[int, Interface] = {}
        for if_index in index_rows.values():
            by_index[if_index] = Interface(index=if_index)

        bridge_rows = walk_column(
            self._transport, oids.OID_DOT1D_BASE_PORT_IF_INDEX, ValueKind.INTEGER
        ).optional()
        for base_port, if_index in bridge_rows.items():
            ifx = by_index.get(if_index)
            if ifx is None:
                logger.debug(f"bridge port {base_port} maps to unknown ifIndex {if_index}, skipped")
                continue
            ifx.bridge_index = base_port

        descr = self._column(oids.interface_property_oid(oids.IF_DESCR), ValueKind.OCTET_STRING)
        alias = self._column(oids.OID_IF_ALIAS, ValueKind.OCTET_STRING)
        kinds = self._column(oids.interface_property_oid(oids.IF_TYPE), ValueKind.INTEGER)
        admin = self._column(oids.interface_property_oid(oids.IF_ADMIN_STATUS), ValueKind.INTEGER)
        oper = self._column(oids.interface_property_oid(oids.IF_OPER_STATUS), ValueKind.INTEGER)

        for if_index, ifx in by_index.items():
            label = _text(descr.get(if_index, b""))
            if if_index in alias:
                label += " " + _text(alias[if_index])
            ifx.label = label
            ifx.kind = kinds.get(if_index, 0)
            ifx.admin_status = admin.get(if_index, 0)
            ifx.oper_status = oper.get(if_index, 0)

        if len(by_index) != num_ifx:
            logger.debug(f"{self._transport.host}: ifNumber={num_ifx} but ifTable has {len(by_index)} rows")
        return list(by_index.values())

    def _column(self, oid: str, kind: ValueKind) -> dict[int, Any]:
        return walk_column(self._transport, oid, kind).optional()


def _text(raw: object) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return str(raw)
