"""
Converter Configuration
=======================

Configuration for a conversion run. Values can come from:
- Default values (defined here)
- Environment variables
- Command-line options (see srec2inc.cli.srec2inc)

Packet Size
-----------
A packet is a 6 byte PPP header followed by whole 24-bit words, and the
word count travels in a single header byte. Valid packet sizes are
therefore multiples of 3 from 9 (one word) to 771 (255 words). The size
is validated before any record is read.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Optional
import os

from srec2inc.errors import PacketSizeError, ResourceUnavailableError
from srec2inc.records import PPP_HEADER_SIZE, WORD_SIZE


# =============================================================================
# Constants
# =============================================================================

DEFAULT_PACKET_SIZE: Final[int] = 18

# Header plus one word
MIN_PACKET_SIZE: Final[int] = PPP_HEADER_SIZE + WORD_SIZE

# Header plus the most words a one byte count can describe
MAX_PACKET_SIZE: Final[int] = PPP_HEADER_SIZE + 0xFF * WORD_SIZE

DEFAULT_OUTPUT: Final[str] = "default.inc"

# Environment variables read by ConverterConfig.from_env()
ENV_PACKET_SIZE: Final[str] = "SREC2INC_PACKET_SIZE"
ENV_OUTPUT: Final[str] = "SREC2INC_OUTPUT"


# =============================================================================
# Validation
# =============================================================================

def validate_packet_size(size: int) -> int:
    """
    Validate a packet size.

    Args:
        size: Packet size in bytes, header included

    Returns:
        The size, unchanged

    Raises:
        PacketSizeError: If the size is not a multiple of 3 in
            [MIN_PACKET_SIZE, MAX_PACKET_SIZE]
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise PacketSizeError(size, f"packet size must be an integer, got {size!r}")
    if size % WORD_SIZE != 0 or not MIN_PACKET_SIZE <= size <= MAX_PACKET_SIZE:
        raise PacketSizeError(
            size,
            f"invalid packet size {size}: must be a multiple of {WORD_SIZE} "
            f"between {MIN_PACKET_SIZE} and {MAX_PACKET_SIZE}",
        )
    return size


def parse_packet_size(text: str) -> int:
    """
    Parse a packet size given as decimal or 0x-prefixed hex, then validate it.

    Raises:
        PacketSizeError: If the text is not a number or not a valid size
    """
    text = text.strip()
    try:
        if text.lower().startswith("0x"):
            size = int(text[2:], 16)
        else:
            size = int(text, 10)
    except ValueError:
        raise PacketSizeError(text, f"invalid packet size {text!r}: not a number") from None
    return validate_packet_size(size)


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class ConverterConfig:
    """
    Configuration for one conversion run.

    Attributes:
        packet_size: Maximum packet size in bytes (default: 18)
        input_path: S-record file to read
        output_path: Include file to write (default: default.inc)
        author: Value for the header's @author field (optional)
        file_version: Value for the header's @version field (optional)
    """

    packet_size: int = DEFAULT_PACKET_SIZE
    input_path: Optional[Path] = None
    output_path: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT))
    author: Optional[str] = None
    file_version: Optional[str] = None

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "ConverterConfig":
        """
        Create ConverterConfig from environment variables.

        Environment variables (all optional):
            SREC2INC_PACKET_SIZE: Packet size (decimal or 0x hex)
            SREC2INC_OUTPUT: Default output path

        Invalid values are ignored and the default is kept.

        Returns:
            ConverterConfig with values from environment variables
        """
        config = cls()

        if packet_size := os.environ.get(ENV_PACKET_SIZE):
            try:
                config.packet_size = parse_packet_size(packet_size)
            except PacketSizeError:
                pass  # Keep the default

        if output := os.environ.get(ENV_OUTPUT):
            config.output_path = Path(output)

        return config

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def validate(self) -> None:
        """
        Check the configuration before any record is read.

        Raises:
            PacketSizeError: If packet_size is invalid
            ResourceUnavailableError: If input_path is set but not a readable file
        """
        validate_packet_size(self.packet_size)

        if self.input_path is not None:
            path = Path(self.input_path)
            if not path.is_file():
                raise ResourceUnavailableError(path, "no such file")
            if not os.access(path, os.R_OK):
                raise ResourceUnavailableError(path, "permission denied")

    def header_fields(self) -> dict[str, Optional[str]]:
        """Values for the file header placeholders; @file stays <filename>."""
        return {
            "author": self.author,
            "version": self.file_version,
        }
