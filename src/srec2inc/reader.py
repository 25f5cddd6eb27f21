"""
S-Record Reader
===============

This module tokenizes an S-record text stream and classifies each token
as a MemorySpaceSwitch, DataRecord, EndOfFile or Unsupported record.

RecordReader
------------
RecordReader wraps a text stream and yields records lazily, in input
order, in a single pass. Records are whitespace-delimited tokens, so
blank lines, CRLF line endings and stray indentation are all tolerated.
Each record carries the number of the input line it was read from.
Once the stream is exhausted the reader stays exhausted; it cannot be
restarted.

Malformed Records
-----------------
By default the reader is permissive. A record too short for its
declared fields is clamped to what is actually present and a warning is
recorded; nothing is raised. The last hex pair of a truncated S2 record
is taken as its checksum and never becomes payload. With strict=True the
same conditions raise MalformedRecordError instead.

Usage Examples
--------------
Reading records from a file:
    >>> from srec2inc.reader import RecordReader
    >>> with open("dsp.s") as f:
    ...     for record in RecordReader(f):
    ...         print(record)

Classifying a single record:
    >>> from srec2inc.reader import parse_record
    >>> parse_record("S00600020000F7", 1)
    MemorySpaceSwitch(space=<MemorySpace.Y: 2>, line_number=1)
"""

from typing import Iterator, Optional, TextIO
import logging
import string

from srec2inc.errors import DiagnosticCollector, MalformedRecordError
from srec2inc.hexdecode import decode_hex
from srec2inc.records import (
    ADDRESS_MASK,
    DataRecord,
    EndOfFile,
    MemorySpace,
    MemorySpaceSwitch,
    Record,
    RecordType,
    S2_OVERHEAD,
    Unsupported,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Field Offsets
# =============================================================================

# S0: memory space code, six hex digits in
S0_SPACE_FIELD = slice(6, 8)

# S2: byte count and 24-bit address
S2_COUNT_FIELD = slice(2, 4)
S2_ADDRESS_FIELD = slice(4, 10)
S2_DATA_START = 10

_HEX_DIGITS = frozenset(string.hexdigits)


# =============================================================================
# Record Classification
# =============================================================================

class _RecordParser:
    """Field extraction for a single record token."""

    def __init__(
        self,
        text: str,
        line_number: int,
        diagnostics: Optional[DiagnosticCollector],
        strict: bool,
    ):
        self.text = text
        self.line_number = line_number
        self.diagnostics = diagnostics
        self.strict = strict

    def malformed(self, message: str) -> None:
        """Report a malformed field: raise when strict, warn otherwise."""
        if self.strict:
            raise MalformedRecordError(
                message, line_number=self.line_number, record_text=self.text
            )
        logger.warning(f"line {self.line_number}: {message}")
        if self.diagnostics is not None:
            self.diagnostics.add_warning(message, self.line_number)

    def field(self, span: slice, name: str, width_bits: int) -> int:
        """Decode a fixed-width hex field, clamping if the record is short."""
        text = self.text[span]
        expected = span.stop - span.start
        if len(text) < expected:
            self.malformed(
                f"record too short for {name} field "
                f"(expected {expected} chars, got {len(text)})"
            )

        decoded = decode_hex(text, width_bits)
        if decoded.digits < len(text):
            self.malformed(f"invalid hex in {name} field: {text!r}")
        elif decoded.overflow and self.diagnostics is not None:
            self.diagnostics.add_warning(
                f"{name} field {text!r} overflows {width_bits} bits",
                self.line_number,
            )
        return decoded.value

    def parse_space_switch(self) -> MemorySpaceSwitch:
        code = self.field(S0_SPACE_FIELD, "memory space", 8)
        space = MemorySpace.from_code(code)
        if not space.is_known():
            logger.debug(
                f"line {self.line_number}: S0 space code 0x{code:02X} "
                f"is not X, Y or P"
            )
        return MemorySpaceSwitch(space=space, line_number=self.line_number)

    def parse_data(self) -> DataRecord:
        byte_count = self.field(S2_COUNT_FIELD, "byte count", 8)
        address = self.field(S2_ADDRESS_FIELD, "address", 32) & ADDRESS_MASK

        if byte_count < S2_OVERHEAD:
            self.malformed(
                f"byte count {byte_count} is smaller than the "
                f"{S2_OVERHEAD} byte address and checksum"
            )

        declared = max(byte_count - S2_OVERHEAD, 0)
        data = self.text[S2_DATA_START:S2_DATA_START + 2 * declared]

        if len(data) < 2 * declared:
            # The last pair of a short record is still its checksum
            data = self.text[S2_DATA_START:-2]
            self.malformed(
                f"payload truncated: declared {declared} bytes, "
                f"found {len(data) // 2}"
            )
        if len(data) % 2:
            self.malformed(f"dangling hex digit {data[-1]!r} dropped")
            data = data[:-1]

        payload = tuple(data[i:i + 2] for i in range(0, len(data), 2))
        if not all(c in _HEX_DIGITS for c in data):
            self.malformed("payload contains non-hex characters")

        return DataRecord(
            byte_count=byte_count,
            address=address,
            payload=payload,
            line_number=self.line_number,
        )


def parse_record(
    text: str,
    line_number: int = 0,
    diagnostics: Optional[DiagnosticCollector] = None,
    strict: bool = False,
) -> Record:
    """
    Classify and decode a single S-record token.

    Args:
        text: The record text, without surrounding whitespace
        line_number: Input line the record was read from, for diagnostics
        diagnostics: Collector for non-fatal warnings (optional)
        strict: Raise MalformedRecordError instead of warning

    Returns:
        A MemorySpaceSwitch, DataRecord, EndOfFile or Unsupported record

    Raises:
        MalformedRecordError: Only when strict is True
    """
    record_type = RecordType.classify(text)
    parser = _RecordParser(text, line_number, diagnostics, strict)

    if record_type is RecordType.SPACE_SWITCH:
        return parser.parse_space_switch()
    elif record_type is RecordType.DATA:
        return parser.parse_data()
    elif record_type is RecordType.END_OF_FILE:
        return EndOfFile(line_number=line_number)
    else:
        logger.debug(f"line {line_number}: unsupported record {text[:2]!r}")
        return Unsupported(text=text, line_number=line_number)


# =============================================================================
# Stream Reader
# =============================================================================

class RecordReader:
    """
    Lazy, single-pass reader over an S-record text stream.

    Attributes:
        stream: The text stream being read
        diagnostics: Collector for non-fatal warnings
        strict: Raise on malformed records instead of warning
        records_read: Number of records yielded so far

    Example:
        >>> reader = RecordReader(io.StringIO("S804000000FB"))
        >>> list(reader)
        [EndOfFile(line_number=1)]
        >>> list(reader)
        []
    """

    def __init__(
        self,
        stream: TextIO,
        diagnostics: Optional[DiagnosticCollector] = None,
        strict: bool = False,
    ):
        self.stream = stream
        self.diagnostics = diagnostics
        self.strict = strict
        self.records_read = 0
        self._records = self._read()

    def __iter__(self) -> Iterator[Record]:
        return self._records

    def __next__(self) -> Record:
        return next(self._records)

    def _tokens(self) -> Iterator[tuple[int, str]]:
        for line_number, line in enumerate(self.stream, start=1):
            for token in line.split():
                yield line_number, token

    def _read(self) -> Iterator[Record]:
        for line_number, token in self._tokens():
            self.records_read += 1
            yield parse_record(
                token,
                line_number=line_number,
                diagnostics=self.diagnostics,
                strict=self.strict,
            )
