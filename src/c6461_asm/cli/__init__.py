"""
C6461 Assembler Command-Line Interface
======================================

This package provides the command-line tool for the C6461 toolchain:

- **c6461asm**: two-pass assembler (source -> listing + load file)

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["c6461asm"]
