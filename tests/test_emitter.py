"""
Packet Emitter Unit Tests
=========================

This module contains tests for splitting data records into PPP packets
and rendering them as C declarations.

Test Categories
---------------
1. Address suffixes: Identifier naming from word addresses
2. Planning: Packet counts, sizes and continuation addresses
3. Rendering: Exact declaration text
4. Emitter: Writing packets, unknown spaces and warnings
"""

import io
import math

import pytest

from srec2inc.emitter import PacketEmitter, packet_name, plan_packets, render_packet
from srec2inc.errors import (
    DiagnosticCollector,
    PacketSizeError,
    UnknownMemorySpaceError,
)
from srec2inc.records import DataRecord, MemorySpace, Packet, address_suffix


# =============================================================================
# Test Fixtures
# =============================================================================

def make_record(address: int, length: int) -> DataRecord:
    """Build a DataRecord whose payload bytes count up from 0x00."""
    payload = tuple(f"{i & 0xFF:02X}" for i in range(length))
    return DataRecord(byte_count=length + 4, address=address, payload=payload)


@pytest.fixture
def small_record() -> DataRecord:
    """10 payload bytes at $001234; fits in one 18 byte packet."""
    return make_record(0x001234, 10)


@pytest.fixture
def long_record() -> DataRecord:
    """51 payload bytes at $000100; five 18 byte packets."""
    return make_record(0x000100, 51)


# =============================================================================
# Address Suffix Tests
# =============================================================================

class TestAddressSuffix:
    """Tests for identifier suffixes."""

    def test_leading_zeros_stripped(self):
        """Test that leading zero characters are removed."""
        assert address_suffix(0x001234) == "1234"
        assert address_suffix(0x000A00) == "A00"
        assert address_suffix(0x000001) == "1"

    def test_inner_and_trailing_zeros_kept(self):
        """Test that only leading zeros are stripped."""
        assert address_suffix(0x100000) == "100000"
        assert address_suffix(0x010203) == "10203"

    def test_uppercase(self):
        """Test that hex digits are uppercase."""
        assert address_suffix(0x00ABCD) == "ABCD"

    def test_zero_address(self):
        """Test that address 0 gives an empty suffix."""
        assert address_suffix(0) == ""


# =============================================================================
# Planning Tests
# =============================================================================

class TestPlanPackets:
    """Tests for plan_packets()."""

    def test_fits_in_one_packet(self, small_record):
        """Test a record smaller than the packet size."""
        packets = plan_packets(small_record, 18)

        assert len(packets) == 1
        assert packets[0].address == 0x001234
        assert packets[0].payload == small_record.payload
        assert packets[0].word_count == 3
        assert packets[0].total_length == 16

    def test_exactly_one_packet(self):
        """Test a payload that exactly fills one packet."""
        packets = plan_packets(make_record(0x10, 12), 18)

        assert len(packets) == 1
        assert packets[0].total_length == 18
        assert packets[0].word_count == 4

    def test_one_byte_over(self):
        """Test a payload one byte larger than a packet holds."""
        packets = plan_packets(make_record(0x10, 13), 18)

        assert [len(p.payload) for p in packets] == [12, 1]
        assert packets[1].address == 0x14

    def test_continuation_addresses(self, long_record):
        """Test the address chain over several continuation packets."""
        packets = plan_packets(long_record, 18)

        assert len(packets) == 5
        assert [p.address for p in packets] == [0x100, 0x104, 0x108, 0x10C, 0x110]
        for previous, current in zip(packets, packets[1:]):
            assert current.address == previous.address + previous.word_count

    def test_final_packet_exact_length(self, long_record):
        """Test that the last packet is not padded."""
        packets = plan_packets(long_record, 18)

        assert [p.total_length for p in packets] == [18, 18, 18, 18, 9]
        assert packets[-1].word_count == 1

    def test_payload_order_preserved(self, long_record):
        """Test that concatenated packets reproduce the payload."""
        packets = plan_packets(long_record, 18)
        joined = tuple(pair for p in packets for pair in p.payload)
        assert joined == long_record.payload

    def test_larger_packet_size(self, long_record):
        """Test splitting with a non-default packet size."""
        packets = plan_packets(long_record, 30)

        assert [len(p.payload) for p in packets] == [24, 24, 3]
        assert [p.address for p in packets] == [0x100, 0x108, 0x110]

    def test_empty_payload(self):
        """Test that an empty payload still yields one packet."""
        packets = plan_packets(DataRecord(byte_count=4, address=0x100), 18)

        assert packets == [Packet(address=0x100, payload=())]
        assert packets[0].total_length == 6
        assert packets[0].word_count == 0

    def test_address_wraps_at_24_bits(self):
        """Test that continuation addresses stay within 24 bits."""
        packets = plan_packets(make_record(0xFFFFFE, 24), 18)
        assert [p.address for p in packets] == [0xFFFFFE, 0x000002]

    @pytest.mark.parametrize("packet_size", [9, 18, 30, 771])
    @pytest.mark.parametrize("length", [0, 1, 3, 11, 12, 13, 24, 100, 767])
    def test_packet_count_and_sum(self, packet_size, length):
        """Test packet count and byte totals for a range of sizes."""
        capacity = packet_size - 6
        packets = plan_packets(make_record(0, length), packet_size)

        assert sum(len(p.payload) for p in packets) == length
        if length > capacity:
            assert len(packets) == math.ceil(length / capacity)
        else:
            assert len(packets) == 1
        assert all(p.total_length <= packet_size for p in packets)

    def test_invalid_packet_size(self, small_record):
        """Test that invalid packet sizes are rejected."""
        for size in (8, 10, 17, 0, 774):
            with pytest.raises(PacketSizeError):
                plan_packets(small_record, size)


# =============================================================================
# Rendering Tests
# =============================================================================

class TestRenderPacket:
    """Tests for render_packet()."""

    def test_single_packet(self, small_record):
        """Test the declarations for a one-packet Y record."""
        [packet] = plan_packets(small_record, 18)

        assert render_packet(packet, MemorySpace.Y) == (
            "uint32_t const PPP_Y1234_LEN = 16;\n"
            "uint8_t const PPP_Y1234[] = {0xC6,0x00,0x03,0x00,0x12,0x34,"
            "0x00,0x01,0x02,0x03,0x04,0x05,0x06,0x07,0x08,0x09,};\n"
            "\n"
        )

    def test_split_record(self):
        """Test the declarations for a P record split in two."""
        packets = plan_packets(make_record(0x000100, 18), 18)
        text = "".join(render_packet(p, MemorySpace.P) for p in packets)

        assert text == (
            "uint32_t const PPP_P100_LEN = 18;\n"
            "uint8_t const PPP_P100[] = {0xC4,0x00,0x04,0x00,0x01,0x00,"
            "0x00,0x01,0x02,0x03,0x04,0x05,0x06,0x07,0x08,0x09,0x0A,0x0B,};\n"
            "\n"
            "uint32_t const PPP_P104_LEN = 12;\n"
            "uint8_t const PPP_P104[] = {0xC4,0x00,0x02,0x00,0x01,0x04,"
            "0x0C,0x0D,0x0E,0x0F,0x10,0x11,};\n"
            "\n"
        )

    def test_x_space(self):
        """Test the X header byte and prefix."""
        packet = Packet(address=0xABCDEF, payload=("12", "34", "56"))

        assert render_packet(packet, MemorySpace.X) == (
            "uint32_t const PPP_XABCDEF_LEN = 9;\n"
            "uint8_t const PPP_XABCDEF[] = {0xC5,0x00,0x01,0xAB,0xCD,0xEF,"
            "0x12,0x34,0x56,};\n"
            "\n"
        )

    def test_payload_verbatim(self):
        """Test that payload text is copied as-is."""
        packet = Packet(address=0x10, payload=("ab", "Cd", "eF"))
        assert "0xab,0xCd,0xeF," in render_packet(packet, MemorySpace.P)

    def test_empty_packet(self):
        """Test rendering a packet with no payload."""
        packet = Packet(address=0x100, payload=())

        assert render_packet(packet, MemorySpace.X) == (
            "uint32_t const PPP_X100_LEN = 6;\n"
            "uint8_t const PPP_X100[] = {0xC5,0x00,0x00,0x00,0x01,0x00,};\n"
            "\n"
        )

    def test_zero_address_name(self):
        """Test that address 0 keeps the empty suffix."""
        packet = Packet(address=0, payload=("00", "00", "00"))

        assert packet_name(packet, MemorySpace.Y) == "PPP_Y"
        assert render_packet(packet, MemorySpace.Y).startswith(
            "uint32_t const PPP_Y_LEN = 9;\n"
        )

    def test_unknown_space(self, small_record):
        """Test that UNKNOWN cannot be rendered."""
        [packet] = plan_packets(small_record, 18)
        with pytest.raises(UnknownMemorySpaceError):
            render_packet(packet, MemorySpace.UNKNOWN)


# =============================================================================
# Emitter Tests
# =============================================================================

class TestPacketEmitter:
    """Tests for PacketEmitter."""

    def test_emit_writes_packets(self, long_record):
        """Test that every packet is written in order."""
        out = io.StringIO()
        emitter = PacketEmitter(18, out)

        packets = emitter.emit(long_record, MemorySpace.X)

        text = out.getvalue()
        assert len(packets) == 5
        assert emitter.packets_emitted == 5
        assert text.count("uint32_t const") == 5
        assert text.count("uint8_t const") == 5
        names = ["PPP_X100", "PPP_X104", "PPP_X108", "PPP_X10C", "PPP_X110"]
        positions = [text.index(f"uint8_t const {name}[]") for name in names]
        assert positions == sorted(positions)

    def test_packets_emitted_accumulates(self, small_record, long_record):
        """Test the running packet count."""
        emitter = PacketEmitter(18, io.StringIO())
        emitter.emit(small_record, MemorySpace.Y)
        emitter.emit(long_record, MemorySpace.Y)
        assert emitter.packets_emitted == 6

    def test_unknown_space_is_fatal(self, small_record):
        """Test that an unknown space raises and writes nothing."""
        out = io.StringIO()
        emitter = PacketEmitter(18, out)
        record = DataRecord(
            byte_count=small_record.byte_count,
            address=small_record.address,
            payload=small_record.payload,
            line_number=9,
        )

        with pytest.raises(UnknownMemorySpaceError, match="line 9"):
            emitter.emit(record, MemorySpace.UNKNOWN)
        assert out.getvalue() == ""
        assert emitter.packets_emitted == 0

    def test_zero_address_warns(self):
        """Test that an empty name suffix is reported."""
        diagnostics = DiagnosticCollector()
        emitter = PacketEmitter(18, io.StringIO(), diagnostics)

        emitter.emit(make_record(0, 3), MemorySpace.P)

        assert diagnostics.warning_count() == 1
        assert "empty name suffix" in diagnostics.report()

    def test_invalid_packet_size(self):
        """Test that the emitter validates its packet size."""
        with pytest.raises(PacketSizeError):
            PacketEmitter(20, io.StringIO())
