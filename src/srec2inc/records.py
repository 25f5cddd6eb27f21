"""
S-Record Type Definitions
=========================

This module defines the data structures for the S-record dialect produced
by `srec -S -R -A3` from a DSP563xx .cld file, and the packet structure the
converter emits.

Input Dialect
-------------
Each record is a single whitespace-delimited token of ASCII hex:

    S<type><count><address><data...><checksum>

Only three record types are meaningful:

**S0** (memory space switch):
    Chars 0-1:  "S0"
    Chars 2-3:  Byte count
    Chars 4-5:  Unused
    Chars 6-7:  Memory space code (01 = X, 02 = Y, 04 = P)

**S2** (data, 24-bit address):
    Chars 0-1:   "S2"
    Chars 2-3:   Byte count (address + data + checksum)
    Chars 4-9:   Word address (24 bits)
    Chars 10+:   Data bytes, then one checksum byte (not validated)

**S8** (end of file):
    Resets the active memory space.

Any other record type is carried as Unsupported and also resets the
active memory space.

Output Packets
--------------
Each S2 payload is split into packets of at most packet_size bytes:

    Byte 0:     PPP header byte (0xC5 = X, 0xC6 = Y, 0xC4 = P)
    Byte 1:     0x00 (reserved)
    Byte 2:     Number of 24-bit words in this packet
    Bytes 3-5:  Word address (big-endian)
    Bytes 6+:   Payload (3 bytes per word)
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Final, Optional, Union

from srec2inc.errors import UnknownMemorySpaceError


# =============================================================================
# Constants
# =============================================================================

# Bytes in a DSP563xx memory word
WORD_SIZE: Final[int] = 3

# PPP header (space, reserved, word count) + 24-bit address
PPP_HEADER_SIZE: Final[int] = 6

# Bytes of an S2 byte count that are not payload (address + checksum)
S2_OVERHEAD: Final[int] = 4

# Mask for 24-bit word addresses
ADDRESS_MASK: Final[int] = 0xFFFFFF


# =============================================================================
# Enumeration Types
# =============================================================================

class MemorySpace(IntEnum):
    """
    DSP563xx memory spaces, valued by their S0 record codes.

    UNKNOWN is both the initial state of a conversion and the state after
    an S8 or unsupported record. It has no header byte or name prefix.
    """
    UNKNOWN = 0x00
    X = 0x01
    Y = 0x02
    P = 0x04

    @classmethod
    def from_code(cls, code: int) -> "MemorySpace":
        """Convert an S0 space code to a MemorySpace, UNKNOWN if unrecognized."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    def is_known(self) -> bool:
        """Check if this space can be emitted (X, Y or P)."""
        return self is not MemorySpace.UNKNOWN

    @property
    def header_byte(self) -> int:
        """
        PPP header byte selecting this space on the DSP.

        Raises:
            UnknownMemorySpaceError: For MemorySpace.UNKNOWN
        """
        try:
            return _HEADER_BYTES[self]
        except KeyError:
            raise UnknownMemorySpaceError() from None

    @property
    def name_prefix(self) -> str:
        """
        Identifier prefix for arrays emitted in this space.

        Raises:
            UnknownMemorySpaceError: For MemorySpace.UNKNOWN
        """
        if not self.is_known():
            raise UnknownMemorySpaceError()
        return f"PPP_{self.name}"


_HEADER_BYTES: Final[dict[MemorySpace, int]] = {
    MemorySpace.X: 0xC5,
    MemorySpace.Y: 0xC6,
    MemorySpace.P: 0xC4,
}


class RecordType(str, Enum):
    """S-record type prefixes understood by the converter."""
    SPACE_SWITCH = "S0"
    DATA = "S2"
    END_OF_FILE = "S8"

    @classmethod
    def classify(cls, text: str) -> Optional["RecordType"]:
        """Return the RecordType for a record's prefix, or None if unsupported."""
        try:
            return cls(text[:2])
        except ValueError:
            return None


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class MemorySpaceSwitch:
    """S0 record: selects the memory space for the following data records."""
    space: MemorySpace
    line_number: int = 0


@dataclass(frozen=True)
class DataRecord:
    """
    S2 record: a run of payload bytes at a 24-bit word address.

    The payload is kept as 2-character hex strings exactly as they appear
    in the input, since the generated arrays reproduce them literally.

    Attributes:
        byte_count: Declared length field (address + payload + checksum)
        address: Word address of the first payload byte
        payload: Payload bytes as hex-digit pairs
        line_number: Input line the record was read from
    """
    byte_count: int
    address: int
    payload: tuple[str, ...] = field(default_factory=tuple)
    line_number: int = 0

    @property
    def declared_payload_length(self) -> int:
        """Payload length implied by byte_count (never negative)."""
        return max(self.byte_count - S2_OVERHEAD, 0)


@dataclass(frozen=True)
class EndOfFile:
    """S8 record: end of a memory image, resets the memory space."""
    line_number: int = 0


@dataclass(frozen=True)
class Unsupported:
    """Any other record; ignored apart from resetting the memory space."""
    text: str = ""
    line_number: int = 0


Record = Union[MemorySpaceSwitch, DataRecord, EndOfFile, Unsupported]


# =============================================================================
# Packets
# =============================================================================

def address_suffix(address: int) -> str:
    """
    Build the identifier suffix for a word address.

    The address is rendered as six uppercase hex digits and leading '0'
    characters are stripped, so 0x001234 gives "1234". Address 0 gives
    an empty suffix.
    """
    return f"{address & ADDRESS_MASK:06X}".lstrip("0")


@dataclass(frozen=True)
class Packet:
    """
    One PPP packet: a bounded slice of a DataRecord's payload.

    Attributes:
        address: Word address the payload is loaded at
        payload: Payload bytes as hex-digit pairs
    """
    address: int
    payload: tuple[str, ...] = field(default_factory=tuple)

    @property
    def word_count(self) -> int:
        """Number of whole 24-bit words carried by this packet."""
        return len(self.payload) // WORD_SIZE

    @property
    def total_length(self) -> int:
        """Size of the packet in bytes, PPP header included."""
        return PPP_HEADER_SIZE + len(self.payload)

    @property
    def suffix(self) -> str:
        """Identifier suffix derived from the packet address."""
        return address_suffix(self.address)

    def address_bytes(self) -> tuple[int, int, int]:
        """The 24-bit address split into big-endian bytes."""
        address = self.address & ADDRESS_MASK
        return (address >> 16) & 0xFF, (address >> 8) & 0xFF, address & 0xFF
