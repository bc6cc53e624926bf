"""RFC 2674 ``PortList`` codec.

A PortList is a byte string where each octet covers eight ports. The most
significant bit of the first octet is port 1, the least significant bit of
the first octet is port 8, the most significant bit of the second octet is
port 9, and so on. All helpers take 0-based bit indexes (port number - 1)
except the ``*_portlist`` conversions, which speak 1-based port numbers.
"""

from __future__ import annotations

from collections.abc import Iterable


class PortListLengthError(ValueError):
    """Two PortLists that must be combined have different lengths."""


def is_port_set(i: int, ports: bytes | bytearray) -> bool:
    """Return whether bit ``i`` (port ``i + 1``) is set in ``ports``."""
    if i < 0:
        raise IndexError(f"port index {i} is negative")
    return bool(ports[i // 8] & (0x80 >> (i % 8)))


def set_port(i: int, ports: bytearray) -> None:
    """Set bit ``i`` (port ``i + 1``) in place."""
    if i < 0:
        raise IndexError(f"port index {i} is negative")
    ports[i // 8] |= 0x80 >> (i % 8)


def unset_port(i: int, ports: bytearray) -> None:
    """Clear bit ``i`` (port ``i + 1``) in place."""
    if i < 0:
        raise IndexError(f"port index {i} is negative")
    ports[i // 8] &= ~(0x80 >> (i % 8)) & 0xFF


def merge_portlists(a: bytes | bytearray, b: bytes | bytearray) -> bytearray:
    """Return the bitwise OR of two PortLists of equal length."""
    if len(a) != len(b):
        raise PortListLengthError(f"cannot merge PortLists of length {len(a)} and {len(b)}")
    return bytearray(x | y for x, y in zip(a, b))


def new_portlist(port_count: int) -> bytearray:
    """Return an all-zero PortList large enough for ``port_count`` ports."""
    return bytearray((max(port_count, 0) + 7) // 8)


def decode_portlist(data: bytes | bytearray) -> set[int]:
    """Decode a dot1q PortList (raw bytes) into a set of port numbers (1-based)."""
    ports: set[int] = set()
    for byte_idx, byte_val in enumerate(data):
        for bit in range(8):
            if byte_val & (0x80 >> bit):
                ports.add(byte_idx * 8 + bit + 1)
    return ports


def encode_portlist(ports: Iterable[int], size: int) -> bytearray:
    """Encode 1-based port numbers into a PortList of ``size`` octets."""
    data = bytearray(size)
    for port in ports:
        set_port(port - 1, data)
    return data
