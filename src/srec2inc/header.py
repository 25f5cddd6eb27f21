"""
Include File Header
===================

The static banner written once at the top of every generated include
file, ahead of the first packet declaration.
"""

from typing import Optional, TextIO


def generate_file_header(
    filename: Optional[str] = None,
    author: Optional[str] = None,
    version: Optional[str] = None,
) -> str:
    """
    Generate the include file banner.

    Args:
        filename: Value for @file, or None to keep the <filename> placeholder
        author: Value for @author, or None to keep the <author> placeholder
        version: Value for @version, or None to keep the <version> placeholder

    Returns:
        The banner text, ending with the stdint include and a blank line

    Example:
        >>> print(generate_file_header(filename="dsp.inc"))
        // $Id$
        ...
         * @file dsp.inc
    """
    lines = [
        "// $Id$",
        "",
        "/**",
        f" * @file {filename or '<filename>'}",
        " * ",
        " * This include file is for Freescale DSP (DSP563xx).  The data is transfered",
        " * via CHIRP commands when the device is booted into PPP operational mode.",
        " *",
        " * @brief This file contains the data to be transfered into a DSP563xx's",
        " *         RAM and is registered as a SLOT PPP ",
        " *",
        f" * @author {author or '<author>'}  ",
        " * ",
        f" * @version {version or '<version>'} ",
        " * ",
        " */ ",
        "",
        "// $Log$ ",
        "",
        "#include <stdint.h>",
        "",
    ]
    return "\n".join(lines) + "\n"


def write_file_header(out: TextIO, **fields: Optional[str]) -> None:
    """Write the banner to a text sink; see generate_file_header() for fields."""
    out.write(generate_file_header(**fields))
