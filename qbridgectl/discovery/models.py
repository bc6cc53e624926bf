"""Pydantic models for LLDP neighbor discovery."""

from __future__ import annotations

from pydantic import BaseModel


class Neighbor(BaseModel):
    local_if_index: int
    remote_mac: bytes = b""
    remote_name: str = ""
    remote_port_name: str = ""
    remote_description: str = ""

    @property
    def mac_address(self) -> str:
        """Remote chassis id as ``aa:bb:cc:dd:ee:ff``."""
        return ":".join(f"{o:02x}" for o in self.remote_mac)

    @property
    def mac_hex(self) -> str:
        """Remote chassis id as plain lower-case hex."""
        return self.remote_mac.hex()
