"""
srec2inc - DSP563xx S-Record to C Include File Converter
========================================================

This package converts S-record images of Freescale DSP563xx programs into
C include files, so that a host microcontroller without a filesystem can
boot the DSP by sending it PPP packets straight from flash.

The input is the S-record dialect produced by `srec -S -R -A3`: S0 records
select the X, Y or P memory space, S2 records carry data at 24-bit word
addresses, and S8 records end an image. Each S2 payload is split into
packets of a configurable size and written as a pair of declarations:

    uint32_t const PPP_P100_LEN = 18;
    uint8_t const PPP_P100[] = {0xC4,0x00,0x04,0x00,0x01,0x00,...};

Main Components
---------------
- **hexdecode**: ASCII hex to fixed-width integer decoding (atoh)
- **reader**: Tokenizes and classifies S-records
- **tracker**: Tracks the active memory space
- **emitter**: Splits data records into packets and renders them
- **header**: The static include file banner
- **converter**: The conversion pass tying it all together

Quick Start
-----------
Convert a file:
    >>> from srec2inc import convert_file
    >>> result = convert_file("dsp.s", "dsp.inc", packet_size=18)
    >>> print(f"{result.packets} packets written")

Or use the command-line tool:
    $ srec2inc dsp.s -o dsp.inc -n 18

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"
__author__ = "srec2inc Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from srec2inc.converter import ConversionResult, convert, convert_file
from srec2inc.config import (
    ConverterConfig,
    DEFAULT_OUTPUT,
    DEFAULT_PACKET_SIZE,
    MAX_PACKET_SIZE,
    MIN_PACKET_SIZE,
    parse_packet_size,
    validate_packet_size,
)
from srec2inc.emitter import PacketEmitter, packet_name, plan_packets, render_packet
from srec2inc.errors import (
    ConfigError,
    ConversionError,
    DiagnosticCollector,
    MalformedRecordError,
    PacketSizeError,
    ResourceUnavailableError,
    Srec2IncError,
    UnknownMemorySpaceError,
)
from srec2inc.header import generate_file_header, write_file_header
from srec2inc.hexdecode import HexValue, atoh, decode_hex
from srec2inc.reader import RecordReader, parse_record
from srec2inc.records import (
    DataRecord,
    EndOfFile,
    MemorySpace,
    MemorySpaceSwitch,
    Packet,
    Record,
    RecordType,
    Unsupported,
    address_suffix,
)
from srec2inc.tracker import MemorySpaceTracker

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Conversion
    "ConversionResult",
    "convert",
    "convert_file",
    # Configuration
    "ConverterConfig",
    "DEFAULT_OUTPUT",
    "DEFAULT_PACKET_SIZE",
    "MAX_PACKET_SIZE",
    "MIN_PACKET_SIZE",
    "parse_packet_size",
    "validate_packet_size",
    # Packets
    "PacketEmitter",
    "packet_name",
    "plan_packets",
    "render_packet",
    # Exception hierarchy
    "Srec2IncError",
    "ConfigError",
    "PacketSizeError",
    "ResourceUnavailableError",
    "ConversionError",
    "UnknownMemorySpaceError",
    "MalformedRecordError",
    "DiagnosticCollector",
    # Header
    "generate_file_header",
    "write_file_header",
    # Hex decoding
    "HexValue",
    "atoh",
    "decode_hex",
    # Records
    "RecordReader",
    "parse_record",
    "DataRecord",
    "EndOfFile",
    "MemorySpace",
    "MemorySpaceSwitch",
    "Packet",
    "Record",
    "RecordType",
    "Unsupported",
    "address_suffix",
    "MemorySpaceTracker",
]
