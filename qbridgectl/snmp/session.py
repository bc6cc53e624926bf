"""SNMPv2c session backed by the ``pysnmp`` asyncio API."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from loguru import logger
from pysnmp.error import PySnmpError
from pysnmp.hlapi.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    bulk_walk_cmd,
    get_cmd,
    set_cmd,
)
from pysnmp.proto import rfc1902, rfc1905

from qbridgectl.config import SnmpConfig
from qbridgectl.exceptions import SnmpDeviceError, SnmpTransportError
from qbridgectl.snmp.transport import BaseTransport, ValueKind, Varbind

_T = TypeVar("_T")

_NULL_TYPES = (rfc1905.NoSuchObject, rfc1905.NoSuchInstance, rfc1905.EndOfMibView)


def to_varbind(oid_obj: Any, val: Any) -> Varbind:
    """Convert one pysnmp (OID, value) pair into a :class:`Varbind`."""
    if hasattr(oid_obj, "getOid"):
        oid_obj = oid_obj.getOid()
    oid = str(oid_obj).lstrip(".")

    if val is None or isinstance(val, _NULL_TYPES):
        return Varbind(oid, ValueKind.NULL)
    if isinstance(val, (rfc1902.Counter32, rfc1902.Counter64)):
        return Varbind(oid, ValueKind.COUNTER, int(val))
    if isinstance(val, (rfc1902.Gauge32, rfc1902.Unsigned32)):
        return Varbind(oid, ValueKind.GAUGE, int(val))
    if isinstance(val, rfc1902.TimeTicks):
        return Varbind(oid, ValueKind.OTHER, int(val))
    if isinstance(val, rfc1902.Integer32):
        return Varbind(oid, ValueKind.INTEGER, int(val))
    if isinstance(val, rfc1902.OctetString):
        return Varbind(oid, ValueKind.OCTET_STRING, bytes(val.asOctets()))
    if isinstance(val, rfc1902.ObjectIdentifier):
        return Varbind(oid, ValueKind.OBJECT_ID, str(val))
    return Varbind(oid, ValueKind.OTHER, None)


def to_object_type(varbind: Varbind) -> ObjectType:
    """Build the pysnmp ``ObjectType`` for a SET of ``varbind``."""
    if varbind.kind is ValueKind.INTEGER:
        value: Any = rfc1902.Integer(int(varbind.value))  # type: ignore[arg-type]
    elif varbind.kind is ValueKind.GAUGE:
        value = rfc1902.Gauge32(int(varbind.value))  # type: ignore[arg-type]
    elif varbind.kind is ValueKind.OCTET_STRING:
        value = rfc1902.OctetString(bytes(varbind.value))  # type: ignore[arg-type]
    else:
        raise ValueError(f"cannot SET a value of kind {varbind.kind.value}")
    return ObjectType(ObjectIdentity(varbind.oid), value)


class SnmpSession(BaseTransport):
    """Synchronous SNMPv2c session for one switch.

    The pysnmp engine runs on a private event loop created by :meth:`connect`
    and closed by :meth:`disconnect`. Every request blocks until the agent
    answers or the configured timeout (and wire retries) are exhausted.

    Usage::

        with SnmpSession(SnmpConfig(host="10.47.1.5", community="private")) as session:
            rows = session.walk("1.3.6.1.2.1.2.2.1.1")
    """

    def __init__(self, config: SnmpConfig):
        super().__init__(config.host, config.community, config.port)
        self.config = config
        self._loop: asyncio.AbstractEventLoop | None = None
        self._engine: Any = None
        self._target: Any = None
        self._auth = CommunityData(config.community, mpModel=1)

    # ── lifecycle ──────────────────────────────────────────────────────

    def connect(self) -> None:
        """Create the event loop, SNMP engine and UDP target."""
        if self.is_connected():
            return
        self._loop = asyncio.new_event_loop()
        try:
            self._loop.run_until_complete(self._open())
        except (PySnmpError, OSError) as e:
            self._close_loop()
            raise SnmpTransportError(f"SNMP session to {self.host}:{self.port} failed: {e}") from e
        logger.info(f"SNMP session opened to {self.host}:{self.port}")

    def disconnect(self) -> None:
        """Shut down the engine dispatcher and close the event loop."""
        if self._engine is not None:
            self._engine.close_dispatcher()
            self._engine = None
        self._target = None
        self._close_loop()

    def is_connected(self) -> bool:
        return self._loop is not None and self._engine is not None

    async def _open(self) -> None:
        self._engine = SnmpEngine()
        self._target = await UdpTransportTarget.create(
            (self.host, self.port or 161),
            timeout=self.config.timeout,
            retries=self.config.retries,
        )

    def _close_loop(self) -> None:
        if self._loop is not None:
            self._loop.close()
            self._loop = None

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        if not self.is_connected():
            coro.close()
            raise SnmpTransportError("Not connected. Call connect() first.")
        assert self._loop is not None
        try:
            return self._loop.run_until_complete(coro)
        except (PySnmpError, OSError) as e:
            raise SnmpTransportError(f"SNMP request to {self.host} failed: {e}") from e

    # ── requests ───────────────────────────────────────────────────────

    def get(self, *oids: str) -> list[Varbind]:
        """GET one or more scalar OIDs, return one Varbind per OID."""
        return self._run(self._get(*oids))

    def walk(self, oid: str) -> list[Varbind]:
        """Bulk-walk the subtree below ``oid``."""
        return self._run(self._walk(oid))

    def set(self, *varbinds: Varbind) -> None:
        """SET all ``varbinds`` in one PDU."""
        self._run(self._set(*varbinds))

    async def _get(self, *oids: str) -> list[Varbind]:
        error_indication, error_status, error_index, var_binds = await get_cmd(
            self._engine,
            self._auth,
            self._target,
            ContextData(),
            *[ObjectType(ObjectIdentity(oid)) for oid in oids],
            lookupMib=False,
        )
        self._check(", ".join(oids), error_indication, error_status, error_index)
        return [to_varbind(oid_obj, val) for oid_obj, val in var_binds]

    async def _walk(self, oid: str) -> list[Varbind]:
        results: list[Varbind] = []
        async for error_indication, error_status, error_index, var_binds in bulk_walk_cmd(
            self._engine,
            self._auth,
            self._target,
            ContextData(),
            0,
            self.config.max_repetitions,
            ObjectType(ObjectIdentity(oid)),
            lexicographicMode=False,
            lookupMib=False,
        ):
            self._check(oid, error_indication, error_status, error_index)
            for var_bind_oid, val in var_binds:
                varbind = to_varbind(var_bind_oid, val)
                if varbind.kind is ValueKind.NULL:
                    continue
                results.append(varbind)
        logger.debug(f"walk [{self.host}] {oid}: {len(results)} rows")
        return results

    async def _set(self, *varbinds: Varbind) -> None:
        error_indication, error_status, error_index, _ = await set_cmd(
            self._engine,
            self._auth,
            self._target,
            ContextData(),
            *[to_object_type(vb) for vb in varbinds],
            lookupMib=False,
        )
        self._check(", ".join(vb.oid for vb in varbinds), error_indication, error_status, error_index)

    def _check(self, what: str, error_indication: Any, error_status: Any, error_index: Any) -> None:
        if error_indication:
            raise SnmpTransportError(f"SNMP error [{self.host}] on {what}: {error_indication}")
        if error_status and int(error_status) != 0:
            name = error_status.prettyPrint() if hasattr(error_status, "prettyPrint") else str(error_status)
            raise SnmpDeviceError(
                f"SNMP error [{self.host}] on {what}: {name} (index {int(error_index or 0)})",
                error_status=int(error_status),
                error_name=name,
                error_index=int(error_index or 0),
            )
