"""
PPP Packet Emission
===================

This module turns S2 data records into C declarations of PPP packets.

Each record's payload is split into packets of at most packet_size bytes,
6 of which are taken by the PPP header (space byte, reserved byte, word
count) and the 24-bit load address. Every packet is rendered as a length
constant followed by a byte array:

    uint32_t const PPP_Y1234_LEN = 12;
    uint8_t const PPP_Y1234[] = {0xC6,0x00,0x02,0x00,0x12,0x34,0x00,0x01,0x02,0x03,0x04,0x05,};

Continuation Packets
--------------------
When a payload does not fit in one packet, every packet but the last is
filled to packet_size. DSP addresses count 24-bit words, so a
continuation packet starts at the previous packet's address plus the
previous packet's word count. The last packet carries whatever remains
and its length constant is its exact size.

Usage
-----
    >>> from srec2inc.emitter import plan_packets, render_packet
    >>> for packet in plan_packets(record, packet_size=18):
    ...     print(render_packet(packet, MemorySpace.Y))
"""

from typing import Optional, TextIO
import logging

from srec2inc.config import validate_packet_size
from srec2inc.errors import DiagnosticCollector, UnknownMemorySpaceError
from srec2inc.records import (
    ADDRESS_MASK,
    PPP_HEADER_SIZE,
    DataRecord,
    MemorySpace,
    Packet,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Packet Planning
# =============================================================================

def plan_packets(record: DataRecord, packet_size: int) -> list[Packet]:
    """
    Split a data record's payload into PPP packets.

    Args:
        record: The S2 record to split
        packet_size: Maximum packet size in bytes, header included

    Returns:
        The packets in transmission order; always at least one, even
        for an empty payload

    Raises:
        PacketSizeError: If packet_size is not a valid packet size

    Example:
        >>> record = DataRecord(byte_count=28, address=0x100, payload=("00",) * 24)
        >>> [(p.address, len(p.payload)) for p in plan_packets(record, 18)]
        [(256, 12), (260, 12)]
    """
    validate_packet_size(packet_size)
    capacity = packet_size - PPP_HEADER_SIZE

    payload = record.payload
    address = record.address
    packets = []
    offset = 0

    while True:
        packet = Packet(address=address, payload=payload[offset:offset + capacity])
        packets.append(packet)
        offset += len(packet.payload)
        if offset >= len(payload):
            break
        address = (address + packet.word_count) & ADDRESS_MASK

    return packets


# =============================================================================
# Rendering
# =============================================================================

def packet_name(packet: Packet, space: MemorySpace) -> str:
    """C identifier for a packet, e.g. PPP_Y1234."""
    return f"{space.name_prefix}{packet.suffix}"


def render_packet(packet: Packet, space: MemorySpace) -> str:
    """
    Render a packet as a length constant and a byte array declaration.

    Args:
        packet: The packet to render
        space: Memory space the packet is loaded into

    Returns:
        Two declaration lines followed by a blank line

    Raises:
        UnknownMemorySpaceError: If space is MemorySpace.UNKNOWN
    """
    name = packet_name(packet, space)

    header = [space.header_byte, 0x00, packet.word_count, *packet.address_bytes()]
    elements = [f"0x{byte:02X}" for byte in header]
    elements.extend(f"0x{pair}" for pair in packet.payload)
    body = "".join(f"{element}," for element in elements)

    lines = [
        f"uint32_t const {name}_LEN = {packet.total_length};",
        f"uint8_t const {name}[] = {{{body}}};",
        "",
    ]
    return "\n".join(lines) + "\n"


# =============================================================================
# Emitter
# =============================================================================

class PacketEmitter:
    """
    Writes the packets of each data record to a text sink.

    Attributes:
        packet_size: Maximum packet size in bytes, header included
        out: Text sink receiving the declarations
        diagnostics: Collector for non-fatal warnings
        packets_emitted: Total packets written so far

    Example:
        >>> emitter = PacketEmitter(18, sys.stdout)
        >>> emitter.emit(record, MemorySpace.X)
    """

    def __init__(
        self,
        packet_size: int,
        out: TextIO,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.packet_size = validate_packet_size(packet_size)
        self.out = out
        self.diagnostics = diagnostics
        self.packets_emitted = 0

    def emit(self, record: DataRecord, space: MemorySpace) -> list[Packet]:
        """
        Write every packet of a data record.

        Args:
            record: The S2 record to emit
            space: The active memory space

        Returns:
            The packets written

        Raises:
            UnknownMemorySpaceError: If no memory space is active; nothing
                is written for the record
        """
        if not space.is_known():
            logger.error(f"line {record.line_number}: unknown srec memory space")
            raise UnknownMemorySpaceError(line_number=record.line_number)

        packets = plan_packets(record, self.packet_size)

        for packet in packets:
            if not packet.suffix:
                message = (
                    f"packet at address 000000 has an empty name suffix "
                    f"({packet_name(packet, space)})"
                )
                logger.warning(f"line {record.line_number}: {message}")
                if self.diagnostics is not None:
                    self.diagnostics.add_warning(message, record.line_number)
            self.out.write(render_packet(packet, space))

        self.packets_emitted += len(packets)
        logger.debug(
            f"line {record.line_number}: {len(record.payload)} bytes at "
            f"{space.name}:{record.address:06X} -> {len(packets)} packet(s)"
        )
        return packets
