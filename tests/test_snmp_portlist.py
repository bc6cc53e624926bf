"""Tests for the RFC 2674 PortList codec."""

import pytest

from qbridgectl.snmp.portlist import (
    PortListLengthError,
    decode_portlist,
    encode_portlist,
    is_port_set,
    merge_portlists,
    new_portlist,
    set_port,
    unset_port,
)


class TestBitOrder:
    """Port 1 is the most significant bit of the first octet."""

    def test_first_port_is_msb(self):
        """Bit index 0 maps to 0x80 in byte 0."""
        ports = bytearray(2)
        set_port(0, ports)
        assert ports == bytearray(b"\x80\x00")

    def test_eighth_port_is_lsb(self):
        """Bit index 7 maps to 0x01 in byte 0."""
        ports = bytearray(2)
        set_port(7, ports)
        assert ports == bytearray(b"\x01\x00")

    def test_ninth_port_starts_second_byte(self):
        """Bit index 8 maps to 0x80 in byte 1."""
        ports = bytearray(2)
        set_port(8, ports)
        assert ports == bytearray(b"\x00\x80")

    def test_is_port_set(self):
        """is_port_set reads the same bit layout."""
        ports = b"\x41\x00"
        assert is_port_set(1, ports)
        assert is_port_set(7, ports)
        assert not is_port_set(0, ports)
        assert not is_port_set(8, ports)


class TestSetUnset:
    """In-place mutation helpers."""

    def test_set_then_unset_restores(self):
        ports = bytearray(b"\x12\x34")
        set_port(5, ports)
        unset_port(5, ports)
        assert ports == bytearray(b"\x12\x34")

    def test_set_is_idempotent(self):
        ports = bytearray(1)
        set_port(3, ports)
        set_port(3, ports)
        assert ports == bytearray(b"\x10")

    def test_unset_leaves_other_bits(self):
        """Only the addressed bit is cleared."""
        ports = bytearray(b"\xff")
        unset_port(0, ports)
        assert ports == bytearray(b"\x7f")

    def test_index_past_end_raises(self):
        """Indexes beyond the bitmap do not grow it."""
        ports = bytearray(1)
        with pytest.raises(IndexError):
            set_port(8, ports)
        with pytest.raises(IndexError):
            is_port_set(8, ports)

    def test_negative_index_raises(self):
        with pytest.raises(IndexError):
            set_port(-1, bytearray(1))
        with pytest.raises(IndexError):
            unset_port(-1, bytearray(1))
        with pytest.raises(IndexError):
            is_port_set(-1, b"\x00")


class TestMerge:
    """Bitwise OR of two PortLists."""

    def test_merge(self):
        assert merge_portlists(b"\x80\x01", b"\x01\x80") == bytearray(b"\x81\x81")

    def test_merge_returns_new_buffer(self):
        a = bytearray(b"\x80")
        result = merge_portlists(a, b"\x01")
        assert a == bytearray(b"\x80")
        assert result == bytearray(b"\x81")

    def test_commutative_and_idempotent(self):
        a, b = b"\x12\x80", b"\x03\x01"
        assert merge_portlists(a, b) == merge_portlists(b, a)
        assert merge_portlists(a, a) == bytearray(a)

    def test_length_mismatch_raises(self):
        with pytest.raises(PortListLengthError):
            merge_portlists(b"\x00", b"\x00\x00")

    def test_length_error_is_value_error(self):
        assert issubclass(PortListLengthError, ValueError)


class TestConversions:
    """1-based port number conversions."""

    def test_new_portlist_rounds_up(self):
        assert len(new_portlist(8)) == 1
        assert len(new_portlist(9)) == 2
        assert len(new_portlist(52)) == 7
        assert new_portlist(0) == bytearray()

    def test_decode(self):
        """0x80 0x01 is ports 1 and 16."""
        assert decode_portlist(b"\x80\x01") == {1, 16}

    def test_decode_empty(self):
        assert decode_portlist(b"") == set()
        assert decode_portlist(b"\x00\x00") == set()

    def test_encode(self):
        assert encode_portlist([2, 4, 6, 8], 2) == bytearray(b"\x55\x00")

    def test_encode_out_of_range_raises(self):
        with pytest.raises(IndexError):
            encode_portlist([17], 2)
