"""
ASCII Hex Decoding
==================

This module converts strings of ASCII hex digits into unsigned integers
of a fixed bit width. It is the only place in the converter where record
fields are turned into numbers.

Decoding Rules
--------------
- Digits '0'-'9', 'a'-'f' and 'A'-'F' are accepted
- Scanning stops at the first other character (no error is raised,
  the value accumulated so far is returned)
- At most width_bits / 4 digits are consumed; if another valid digit
  follows, decoding stops and the result is flagged as an overflow
- An empty or fully invalid string decodes to zero

Overflow is a degraded-but-continuing outcome: it is logged as a warning
and reported through the HexValue.overflow flag, never raised.

Usage
-----
    from srec2inc.hexdecode import atoh, decode_hex

    atoh("1234", 16)             # 0x1234
    atoh("12zz", 16)             # 0x12
    decode_hex("123", 8)         # HexValue(value=0x12, digits=2, overflow=True)
"""

from dataclasses import dataclass
from typing import Final
import logging

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Integer widths the decoder supports (matching uint8_t .. uint64_t)
SUPPORTED_WIDTHS: Final[tuple[int, ...]] = (8, 16, 32, 64)

_DIGITS: Final[dict[str, int]] = {
    **{c: ord(c) - ord("0") for c in "0123456789"},
    **{c: ord(c) - ord("a") + 10 for c in "abcdef"},
    **{c: ord(c) - ord("A") + 10 for c in "ABCDEF"},
}


# =============================================================================
# Decoder
# =============================================================================

@dataclass(frozen=True)
class HexValue:
    """
    Result of decoding a hex string.

    Attributes:
        value: The decoded unsigned integer
        digits: Number of hex digits consumed
        overflow: True if valid digits remained past the width limit
    """
    value: int
    digits: int
    overflow: bool = False


def decode_hex(text: str, width_bits: int = 32) -> HexValue:
    """
    Decode an ASCII hex string into an unsigned integer.

    Args:
        text: The string to decode (need not be entirely hex)
        width_bits: Target integer width, one of 8, 16, 32, 64

    Returns:
        A HexValue with the decoded value and overflow flag

    Raises:
        ValueError: If width_bits is not a supported width

    Example:
        >>> decode_hex("00FF", 16).value
        255
        >>> decode_hex("1FF", 8)
        HexValue(value=31, digits=2, overflow=True)
    """
    if width_bits not in SUPPORTED_WIDTHS:
        raise ValueError(
            f"Unsupported width {width_bits}, expected one of {SUPPORTED_WIDTHS}"
        )

    max_digits = width_bits // 4
    value = 0
    digits = 0
    overflow = False

    for ch in text:
        digit = _DIGITS.get(ch)
        if digit is None:
            break
        if digits == max_digits:
            overflow = True
            logger.warning(
                f"Hex value {text!r} overflows {width_bits} bits, "
                f"truncated to 0x{value:0{max_digits}X}"
            )
            break
        value = (value << 4) + digit
        digits += 1

    return HexValue(value=value, digits=digits, overflow=overflow)


def atoh(text: str, width_bits: int = 32) -> int:
    """
    Decode an ASCII hex string, returning only the integer value.

    Convenience wrapper around decode_hex() for callers that don't care
    whether the value was truncated (the truncation is still logged).

    Args:
        text: The string to decode
        width_bits: Target integer width, one of 8, 16, 32, 64

    Returns:
        The decoded unsigned integer
    """
    return decode_hex(text, width_bits).value
