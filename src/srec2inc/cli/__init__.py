"""
srec2inc Command-Line Interface
===============================

This package provides the command-line tool for the converter:

- **srec2inc**: DSP563xx S-record to C include file converter

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["srec2inc"]
