"""
srec2inc - S-Record to C Include File Command-Line Interface
============================================================

This module implements the command-line interface for the converter.
It turns a DSP563xx S-record image into a C include file of PPP packets
that a host MCU can send to the DSP at boot.

The input should be generated with:
    $ srec -S -R -A3 program.cld

    -S  emits S0 records indicating the DSP memory space
    -R  reverses byte order from lo -> hi to hi -> lo
    -A3 forces S2 records with 24-bit addressing

Usage Examples
--------------
Basic conversion (writes default.inc):
    $ srec2inc program.s

With output file and packet size:
    $ srec2inc program.s -o program.inc -n 18

Packet size in hex:
    $ srec2inc program.s -n 0x30

Verbose mode:
    $ srec2inc -v program.s
"""

import logging
from pathlib import Path
from typing import Optional

import click

from srec2inc import __version__
from srec2inc.cli.errors import handle_cli_exception
from srec2inc.config import ConverterConfig, parse_packet_size
from srec2inc.converter import convert_file
from srec2inc.errors import PacketSizeError

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Parameter Types
# =============================================================================

class PacketSizeType(click.ParamType):
    """
    Click parameter type for the packet size.

    Accepts decimal (18) or 0x-prefixed hex (0x12); the value must be a
    multiple of 3 between 9 and 771.
    """
    name = "packet_size"

    def convert(self, value, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> int:
        """Convert and validate a packet size."""
        if isinstance(value, int):
            text = str(value)
        else:
            text = value
        try:
            return parse_packet_size(text)
        except PacketSizeError as e:
            self.fail(str(e), param, ctx)


PACKET_SIZE = PacketSizeType()


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output include file (default: default.inc, or $SREC2INC_OUTPUT)",
)
@click.option(
    "-n", "--packet-size",
    type=PACKET_SIZE,
    default=None,
    help="Maximum packet size in bytes including the 6 byte PPP header. "
         "Multiple of 3, minimum 9. Decimal or 0x hex. "
         "Default: 18, or $SREC2INC_PACKET_SIZE",
)
@click.option(
    "--author",
    help="Text for the @author field of the file header",
)
@click.option(
    "--file-version",
    help="Text for the @version field of the file header",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="srec2inc")
def main(
    input_file: Path,
    output: Optional[Path],
    packet_size: Optional[int],
    author: Optional[str],
    file_version: Optional[str],
    verbose: bool,
) -> None:
    """
    Convert a DSP563xx S-record file into a C include file.

    INPUT_FILE is an S-record file generated with 'srec -S -R -A3'.

    Every S2 record becomes one or more uint8_t arrays holding a PPP
    packet (header, 24-bit address and data), each with a matching
    uint32_t length constant.

    \b
    Examples:
        srec2inc dsp.s                   # Outputs default.inc
        srec2inc dsp.s -o dsp.inc        # Specify output file
        srec2inc dsp.s -n 48             # 48 byte packets
    """
    setup_logging(verbose)

    try:
        config = ConverterConfig.from_env()
        config.input_path = input_file
        if output is not None:
            config.output_path = output
        if packet_size is not None:
            config.packet_size = packet_size
        config.author = author
        config.file_version = file_version

        config.validate()
        logger.debug(f"Configuration: {config}")

        if verbose:
            click.echo(f"Converting {config.input_path} -> {config.output_path}")
            click.echo(f"Packet size: {config.packet_size} bytes")

        result = convert_file(
            config.input_path,
            config.output_path,
            config.packet_size,
            **config.header_fields(),
        )

        if verbose:
            click.echo(f"Records: {result.records}")
            click.echo(f"  S0 (memory space): {result.space_switches}")
            click.echo(f"  S2 (data):         {result.data_records}")
            click.echo(f"  S8 (end of file):  {result.end_records}")
            click.echo(f"  Unsupported:       {result.unsupported_records}")

        click.echo(
            f"Wrote {config.output_path} "
            f"({result.packets} packets from {result.data_records} data records)"
        )
        if result.warnings:
            click.echo(f"{len(result.warnings)} warning(s)", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Conversion")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
