"""SNMP switch client: one session, three managers."""

from __future__ import annotations

from collections.abc import Iterable
from types import TracebackType
from typing import Self

from qbridgectl.config import SnmpConfig
from qbridgectl.discovery.lldp import LldpNeighborManager
from qbridgectl.discovery.models import Neighbor
from qbridgectl.snmp.session import SnmpSession
from qbridgectl.snmp.transport import BaseTransport
from qbridgectl.switchctrl.interfaces import InterfaceManager
from qbridgectl.switchctrl.models.interface import Interface
from qbridgectl.switchctrl.models.vlan import Vlan
from qbridgectl.switchctrl.vlans import VlanManager


class SnmpSwitch:
    """High-level client for a Q-BRIDGE capable switch.

    Owns a single SNMP transport for its whole lifetime; use one instance per
    device and do not call it from several threads at once.

    Usage::

        with SnmpSwitch(host="10.47.1.5", community="private") as switch:
            for ifx in switch.get_interfaces():
                print(ifx.index, ifx.label)

            switch.create_vlan(101)
            switch.set_port_access([2, 4, 6, 8], 101)
    """

    def __init__(
        self,
        host: str = "",
        community: str = "public",
        port: int = 161,
        timeout: float = 5.0,
        retries: int = 0,
        auto_create_on_write: bool = False,
        config: SnmpConfig | None = None,
        transport: BaseTransport | None = None,
    ):
        if config is None:
            config = SnmpConfig(
                host=host or (transport.host if transport else ""),
                community=community,
                port=port,
                timeout=timeout,
                retries=retries,
                auto_create_on_write=auto_create_on_write,
            )
        self.config = config
        self.host = config.host
        self._transport: BaseTransport = transport if transport is not None else SnmpSession(config)

        # Lazy-initialized managers
        self._interfaces: InterfaceManager | None = None
        self._vlan: VlanManager | None = None
        self._lldp: LldpNeighborManager | None = None

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    @property
    def interfaces(self) -> InterfaceManager:
        """Access the interface inventory."""
        if self._interfaces is None:
            self._ensure_connected()
            self._interfaces = InterfaceManager(self._transport)
        return self._interfaces

    @property
    def vlan(self) -> VlanManager:
        """Access VLAN inventory and membership changes."""
        if self._vlan is None:
            self._ensure_connected()
            self._vlan = VlanManager(self._transport, auto_create_on_write=self.config.auto_create_on_write)
        return self._vlan

    @property
    def lldp(self) -> LldpNeighborManager:
        """Access LLDP neighbor discovery."""
        if self._lldp is None:
            self._ensure_connected()
            self._lldp = LldpNeighborManager(self._transport)
        return self._lldp

    # ── controller operations ──────────────────────────────────────────

    def get_interfaces(self) -> list[Interface]:
        return self.interfaces.list_interfaces()

    def get_vlans(self) -> list[Vlan]:
        return self.vlan.list_vlans()

    def get_neighbors(self) -> dict[int, Neighbor]:
        return self.lldp.get_neighbors()

    def create_vlan(self, vlan_id: int) -> None:
        self.vlan.create_vlan(vlan_id)

    def delete_vlan(self, vlan_id: int) -> None:
        self.vlan.delete_vlan(vlan_id)

    def set_port_access(self, ports: Iterable[int], vlan_id: int) -> None:
        self.vlan.set_port_access(ports, vlan_id)

    def set_port_trunk(self, ports: Iterable[int], vlan_ids: Iterable[int]) -> None:
        self.vlan.set_port_trunk(ports, vlan_ids)

    def clear_port(self, ports: Iterable[int]) -> None:
        self.vlan.clear_port(ports)

    # ── lifecycle ──────────────────────────────────────────────────────

    def connect(self) -> None:
        """Explicitly open the transport."""
        self._ensure_connected()

    def disconnect(self) -> None:
        """Drop the managers and close the transport."""
        self._interfaces = None
        self._vlan = None
        self._lldp = None

        if self._transport.is_connected():
            self._transport.disconnect()

    def _ensure_connected(self) -> None:
        if not self._transport.is_connected():
            self._transport.connect()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
