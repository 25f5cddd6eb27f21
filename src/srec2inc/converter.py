"""
S-Record to Include File Conversion
===================================

This module drives a conversion run: it writes the file header, reads
records in order, keeps the active memory space up to date and hands
each data record to the packet emitter.

The run is a single linear pass. A fatal error (unknown memory space,
unreadable input, unwritable output) stops it immediately; whatever was
already written to the output is left in place.

Usage Examples
--------------
Converting between files:
    >>> from srec2inc import convert_file
    >>> result = convert_file("dsp.s", "dsp.inc", packet_size=18)
    >>> print(f"{result.packets} packets from {result.data_records} records")

Converting between streams:
    >>> import io
    >>> out = io.StringIO()
    >>> convert(io.StringIO(srec_text), out)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO, Union
import logging

from srec2inc.config import DEFAULT_OUTPUT, DEFAULT_PACKET_SIZE, validate_packet_size
from srec2inc.emitter import PacketEmitter
from srec2inc.errors import DiagnosticCollector, ResourceUnavailableError
from srec2inc.header import write_file_header
from srec2inc.reader import RecordReader
from srec2inc.records import (
    DataRecord,
    EndOfFile,
    MemorySpaceSwitch,
    Unsupported,
)
from srec2inc.tracker import MemorySpaceTracker

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Conversion Result
# =============================================================================

@dataclass
class ConversionResult:
    """
    Summary of a completed conversion run.

    Attributes:
        space_switches: S0 records read
        data_records: S2 records read
        end_records: S8 records read
        unsupported_records: Records of any other type
        packets: Packets written
        warnings: Non-fatal warnings collected during the run
    """
    space_switches: int = 0
    data_records: int = 0
    end_records: int = 0
    unsupported_records: int = 0
    packets: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def records(self) -> int:
        """Total records read."""
        return (
            self.space_switches
            + self.data_records
            + self.end_records
            + self.unsupported_records
        )


# =============================================================================
# Conversion
# =============================================================================

def convert(
    in_stream: TextIO,
    out_stream: TextIO,
    packet_size: int = DEFAULT_PACKET_SIZE,
    *,
    filename: Optional[str] = None,
    author: Optional[str] = None,
    version: Optional[str] = None,
    diagnostics: Optional[DiagnosticCollector] = None,
    strict: bool = False,
) -> ConversionResult:
    """
    Convert an S-record stream into include file declarations.

    Args:
        in_stream: Text stream of S-records
        out_stream: Text sink for the include file
        packet_size: Maximum packet size in bytes, header included
        filename: Value for the header's @file field
        author: Value for the header's @author field
        version: Value for the header's @version field
        diagnostics: Collector for non-fatal warnings (a fresh one is
            used if not given)
        strict: Raise MalformedRecordError on malformed records

    Returns:
        A ConversionResult summarizing the run

    Raises:
        PacketSizeError: If packet_size is invalid (nothing is written)
        UnknownMemorySpaceError: If an S2 record has no active memory space
        MalformedRecordError: Only when strict is True
    """
    validate_packet_size(packet_size)

    if diagnostics is None:
        diagnostics = DiagnosticCollector()

    result = ConversionResult()
    tracker = MemorySpaceTracker()
    emitter = PacketEmitter(packet_size, out_stream, diagnostics)
    reader = RecordReader(in_stream, diagnostics, strict=strict)

    write_file_header(out_stream, filename=filename, author=author, version=version)

    for record in reader:
        if isinstance(record, DataRecord):
            result.data_records += 1
            emitter.emit(record, tracker.current)
            continue

        if isinstance(record, MemorySpaceSwitch):
            result.space_switches += 1
        elif isinstance(record, EndOfFile):
            result.end_records += 1
        elif isinstance(record, Unsupported):
            result.unsupported_records += 1
        tracker.apply(record)

    result.packets = emitter.packets_emitted
    result.warnings = list(diagnostics.warnings)

    logger.info(
        f"Converted {result.data_records} data record(s) into "
        f"{result.packets} packet(s)"
    )
    return result


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path, None] = None,
    packet_size: int = DEFAULT_PACKET_SIZE,
    **kwargs,
) -> ConversionResult:
    """
    Convert an S-record file into an include file.

    Args:
        input_path: S-record file to read
        output_path: Include file to write (default: default.inc in the
            current directory)
        packet_size: Maximum packet size in bytes, header included
        **kwargs: Passed through to convert(); the header keeps its
            <filename> placeholder unless filename is given

    Returns:
        A ConversionResult summarizing the run

    Raises:
        PacketSizeError: If packet_size is invalid (no file is touched)
        ResourceUnavailableError: If either file cannot be opened
        UnknownMemorySpaceError: If an S2 record has no active memory space
    """
    validate_packet_size(packet_size)

    input_path = Path(input_path)
    output_path = Path(output_path) if output_path is not None else Path(DEFAULT_OUTPUT)

    try:
        in_stream = open(input_path, "r", encoding="ascii", errors="replace")
    except OSError as e:
        raise ResourceUnavailableError(input_path, e.strerror or str(e)) from e

    with in_stream:
        try:
            out_stream = open(output_path, "w", encoding="ascii", errors="replace", newline="\n")
        except OSError as e:
            raise ResourceUnavailableError(output_path, e.strerror or str(e)) from e

        with out_stream:
            logger.debug(f"Converting {input_path} -> {output_path}")
            return convert(in_stream, out_stream, packet_size, **kwargs)
