"""
srec2inc Error Hierarchy
========================

This module defines the exception hierarchy for the whole converter.
All exceptions inherit from Srec2IncError, allowing callers to catch
every converter-related error with a single except clause if desired.

Exception Hierarchy
-------------------
Srec2IncError (base)
├── ConfigError (configuration rejected before any record is read)
│   └── PacketSizeError - packet size not a positive multiple of 3, or < 9
├── ResourceUnavailableError - input or output stream cannot be opened
└── ConversionError (raised while walking the S-record stream)
    ├── UnknownMemorySpaceError - S2 record with no valid memory space
    └── MalformedRecordError - record too short for its declared fields

Fatal vs. Non-Fatal
-------------------
Every exception above aborts the conversion. Degraded input that the
converter can still make sense of (hex overflow, truncated payloads,
an empty identifier suffix) is not raised; it is recorded as a warning
in a DiagnosticCollector and processing continues.

Error messages for record-level problems follow this format:
    line 12: error: description
    S2150012340001...
    hint: suggestion for fixing (when available)
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Srec2IncError(Exception):
    """
    Base exception for all srec2inc errors.

    All exceptions in the package inherit from this class, allowing
    callers to catch every converter error with a single except clause:

        try:
            convert_file("dsp.s", "dsp.inc")
        except Srec2IncError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(Srec2IncError):
    """Base exception for invalid converter configuration."""
    pass


class PacketSizeError(ConfigError):
    """
    Invalid packet size.

    Packets carry whole 24-bit words behind a 6 byte PPP header and a
    one byte word count, so the packet size must be a multiple of 3
    between 9 (one word) and 771 (255 words).
    """

    def __init__(self, size, message: str = ""):
        self.size = size
        if not message:
            message = (
                f"invalid packet size {size}: must be a multiple of 3 "
                f"between 9 and 771"
            )
        super().__init__(message)


# =============================================================================
# Resource Exceptions
# =============================================================================

class ResourceUnavailableError(Srec2IncError):
    """
    The configured input or output stream cannot be acquired.

    Raised when:
    - The input file does not exist or is not readable
    - The output file cannot be created or opened for writing
    """

    def __init__(self, path, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"cannot open {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


# =============================================================================
# Conversion Exceptions
# =============================================================================

class ConversionError(Srec2IncError):
    """
    Base exception for errors raised while converting records.

    Attributes:
        message: The error description
        line_number: Input line of the offending record (optional)
        record_text: The raw record text (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        record_text: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.record_text = record_text
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, record text, and hint.

        Example output:
            line 2: error: S2 record before any memory space selection
                S21500123400010203040506070809A1
            hint: the input must start with an S0 record (srec -S)
        """
        parts = []

        if self.line_number is not None:
            parts.append(f"line {self.line_number}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.record_text is not None:
            parts.append(f"    {self.record_text}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnknownMemorySpaceError(ConversionError):
    """
    A data record was found while no valid memory space is selected.

    There is no PPP header byte or array name prefix for an unknown
    space, so the conversion cannot continue. This happens when an S2
    record precedes every S0 record, follows an S8/unsupported record,
    or follows an S0 record carrying a code other than X, Y or P.
    """

    def __init__(
        self,
        line_number: Optional[int] = None,
        record_text: Optional[str] = None,
    ):
        super().__init__(
            "unknown srec memory space",
            line_number=line_number,
            record_text=record_text,
            hint="generate the input with 'srec -S -R -A3' so that an S0 "
                 "record selects X, Y or P memory before the data",
        )


class MalformedRecordError(ConversionError):
    """
    A record is too short to contain its declared fields.

    The converter is permissive by default and only records a warning
    for these; this exception is raised by callers that opt into
    strict parsing.
    """
    pass


# =============================================================================
# Diagnostic Collection for Non-Fatal Problems
# =============================================================================

class DiagnosticCollector:
    """
    Collects non-fatal warnings for batch reporting.

    The reader and emitter use this to keep going after meeting degraded
    input, collecting every warning so that the user sees all of them at
    the end of the run instead of only the first.

    Example:
        diagnostics = DiagnosticCollector()
        result = convert(src, dst, diagnostics=diagnostics)
        if diagnostics.has_warnings():
            print(diagnostics.report())
    """

    def __init__(self, max_warnings: int = 1000):
        """
        Initialize the collector.

        Args:
            max_warnings: Warnings kept for reporting; later ones are
                counted but not stored
        """
        self.warnings: list[str] = []
        self.max_warnings = max_warnings
        self._dropped = 0

    def add_warning(self, message: str, line_number: Optional[int] = None) -> None:
        """Add a warning message, optionally tagged with its input line."""
        if line_number is not None:
            message = f"line {line_number}: warning: {message}"
        else:
            message = f"warning: {message}"

        if len(self.warnings) < self.max_warnings:
            self.warnings.append(message)
        else:
            self._dropped += 1

    def has_warnings(self) -> bool:
        """Return True if any warnings have been collected."""
        return self.warning_count() > 0

    def warning_count(self) -> int:
        """Return the number of warnings seen, including unstored ones."""
        return len(self.warnings) + self._dropped

    def report(self) -> str:
        """
        Format all warnings for display.

        Returns:
            Formatted string with one warning per line and a summary
        """
        lines = list(self.warnings)
        if self._dropped:
            lines.append(f"... and {self._dropped} more warning(s)")
        count = self.warning_count()
        if count:
            lines.append(f"{count} warning(s)")
        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected warnings."""
        self.warnings.clear()
        self._dropped = 0
