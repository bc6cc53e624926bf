"""OID constants and addressing helpers for IF, BRIDGE, Q-BRIDGE and LLDP tables.

All OIDs are dotted-decimal strings without a leading dot.
"""

from __future__ import annotations

from qbridgectl.exceptions import OidParseError

# ── IF-MIB ─────────────────────────────────────────────────────────────
OID_IF_NUMBER = "1.3.6.1.2.1.2.1.0"  # IF-MIB::ifNumber
OID_IF_TABLE_ENTRY = "1.3.6.1.2.1.2.2.1"  # IF-MIB::ifEntry
OID_IF_ALIAS = "1.3.6.1.2.1.31.1.1.1.18"  # IF-MIB::ifAlias

IF_INDEX = 1
IF_DESCR = 2
IF_TYPE = 3
IF_ADMIN_STATUS = 7
IF_OPER_STATUS = 8

# ── BRIDGE-MIB ─────────────────────────────────────────────────────────
OID_DOT1D_BASE_NUM_PORTS = "1.3.6.1.2.1.17.1.2.0"  # BRIDGE-MIB::dot1dBaseNumPorts
OID_DOT1D_BASE_PORT_IF_INDEX = "1.3.6.1.2.1.17.1.4.1.2"  # BRIDGE-MIB::dot1dBasePortIfIndex

# ── Q-BRIDGE-MIB ───────────────────────────────────────────────────────
OID_DOT1Q_NUM_VLANS = "1.3.6.1.2.1.17.7.1.1.4.0"  # Q-BRIDGE-MIB::dot1qNumVlans
OID_VLAN_CURRENT_ENTRY = "1.3.6.1.2.1.17.7.1.4.2.1"  # Q-BRIDGE-MIB::dot1qVlanCurrentEntry
OID_VLAN_STATIC_ENTRY = "1.3.6.1.2.1.17.7.1.4.3.1"  # Q-BRIDGE-MIB::dot1qVlanStaticEntry

VLAN_CURRENT_EGRESS = 4
VLAN_CURRENT_UNTAGGED = 5

VLAN_STATIC_NAME = 1
VLAN_STATIC_EGRESS = 2
VLAN_STATIC_UNTAGGED = 4
VLAN_STATIC_ROW_STATUS = 5

# SNMPv2-TC RowStatus values
ROW_STATUS_CREATE_AND_GO = 4
ROW_STATUS_DESTROY = 6

# ── LLDP-MIB ───────────────────────────────────────────────────────────
OID_LLDP_REM_ENTRY = "1.0.8802.1.1.2.1.4.1.1"  # LLDP-MIB::lldpRemEntry

LLDP_REM_CHASSIS_ID = 7
LLDP_REM_PORT_ID = 8
LLDP_REM_SYS_NAME = 9
LLDP_REM_SYS_DESC = 10


def _normalize(oid: str) -> str:
    return oid.strip().lstrip(".")


def interface_property_oid(column: int) -> str:
    """Return the ifTable column OID for ``column`` (1 = ifIndex, 2 = ifDescr, ...)."""
    return f"{OID_IF_TABLE_ENTRY}.{column}"


def current_vlan_property_oid(column: int) -> str:
    """Return the dot1qVlanCurrentTable column OID for ``column``."""
    return f"{OID_VLAN_CURRENT_ENTRY}.{column}"


def static_vlan_property_oid(column: int) -> str:
    """Return the dot1qVlanStaticTable column OID for ``column``."""
    return f"{OID_VLAN_STATIC_ENTRY}.{column}"


def vlan_egress_oid(vlan_id: int) -> str:
    """dot1qVlanStaticEgressPorts instance for ``vlan_id``."""
    return f"{static_vlan_property_oid(VLAN_STATIC_EGRESS)}.{vlan_id}"


def vlan_access_oid(vlan_id: int) -> str:
    """dot1qVlanStaticUntaggedPorts instance for ``vlan_id``."""
    return f"{static_vlan_property_oid(VLAN_STATIC_UNTAGGED)}.{vlan_id}"


def vlan_row_status_oid(vlan_id: int) -> str:
    """dot1qVlanStaticRowStatus instance for ``vlan_id``."""
    return f"{static_vlan_property_oid(VLAN_STATIC_ROW_STATUS)}.{vlan_id}"


def lldp_remote_property_oid(column: int) -> str:
    """Return the lldpRemTable column OID for ``column``."""
    return f"{OID_LLDP_REM_ENTRY}.{column}"


def extract_row_key(oid: str, prefix: str) -> int:
    """Return the trailing numeric component of a row ``oid`` below ``prefix``.

    For single-index tables this is the row index itself. For tables indexed
    by several components (e.g. ``dot1qVlanCurrentTable`` with
    ``(TimeMark, VlanIndex)``) it is the last index component.

    Raises:
        OidParseError: If ``oid`` is not below ``prefix`` or the trailing
            component is not numeric.
    """
    oid = _normalize(oid)
    prefix = _normalize(prefix)
    if not oid.startswith(prefix + "."):
        raise OidParseError(f"OID {oid} is not a row of {prefix}")
    suffix = oid[len(prefix) + 1 :]
    tail = suffix.rsplit(".", 1)[-1]
    if not tail.isdigit():
        raise OidParseError(f"OID {oid} has non-numeric row key '{tail}'")
    return int(tail)


def extract_lldp_index(oid: str) -> int:
    """Return the ``lldpRemLocalPortNum`` of an lldpRemTable row OID.

    Rows are indexed by ``(TimeMark, LocalPortNum, RemIndex)``, so the local
    port number is the trailing-but-one component.
    """
    parts = _normalize(oid).split(".")
    if len(parts) < 2 or not parts[-2].isdigit():
        raise OidParseError(f"OID {oid} does not carry an LLDP local port number")
    return int(parts[-2])
