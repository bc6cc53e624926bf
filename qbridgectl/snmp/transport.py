"""Abstract base transport for SNMP switch communication."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from types import TracebackType
from typing import Self


class ValueKind(Enum):
    """SNMP value types the switch tables carry."""

    INTEGER = "Integer"
    GAUGE = "Gauge32"
    COUNTER = "Counter"
    OCTET_STRING = "OctetString"
    OBJECT_ID = "ObjectIdentifier"
    NULL = "Null"  # noSuchObject / noSuchInstance / endOfMibView
    OTHER = "Other"


@dataclass(frozen=True)
class Varbind:
    """One (OID, type, value) triple crossing the transport boundary.

    ``value`` is an ``int`` for numeric kinds, ``bytes`` for octet strings,
    a dotted string for object identifiers and ``None`` for ``NULL``.
    """

    oid: str
    kind: ValueKind
    value: int | bytes | str | None = None


class BaseTransport(ABC):
    """Abstract base class for switch transports.

    A transport is owned by exactly one switch client and is not meant to be
    used by more than one caller at a time.
    """

    def __init__(self, host: str, community: str, port: int | None = None):
        self.host = host
        self.community = community
        self.port = port

    @abstractmethod
    def connect(self) -> None:
        """Establish the session with the switch."""

    @abstractmethod
    def disconnect(self) -> None:
        """Release the session."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if transport is currently connected."""

    @abstractmethod
    def get(self, *oids: str) -> list[Varbind]:
        """GET one or more scalar OIDs."""

    @abstractmethod
    def walk(self, oid: str) -> list[Varbind]:
        """Walk the subtree below ``oid`` and return its rows in device order."""

    @abstractmethod
    def set(self, *varbinds: Varbind) -> None:
        """SET one or more OIDs in a single PDU.

        Raises:
            SnmpDeviceError: If the agent answers with a non-zero error status.
        """

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
