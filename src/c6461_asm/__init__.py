"""
C6461 Assembler - Toolchain for the C6461 Teaching Machine
==========================================================

This package assembles source for the C6461, a small fixed-format
machine with a 16-bit word, four general purpose registers and three
index registers.

Main Components
---------------
- **assembler**: Two-pass assembler (c6461asm)
    Converts assembly source (source.txt) into a listing (listing.txt)
    and a simulator load file (load.txt)

- **cpu**: Instruction set definitions
    Mnemonics, directives and encoding recipes

Quick Start
-----------
Assemble a program:
    >>> from c6461_asm import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_file("source.txt", "listing.txt", "load.txt")

Or use the command-line tool:
    $ c6461asm source.txt -l listing.txt -o load.txt

Version History
---------------
1.0.0 - Initial release with assembler, listing/load/symbol output and CLI
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from c6461_asm.assembler import Assembler, assemble, assemble_file
from c6461_asm.config import AssemblerConfig
from c6461_asm.errors import (
    C6461Error,
    AssemblerError,
    OperandError,
    UnknownInstructionError,
    SourceFileError,
    SourceLocation,
    ErrorCollector,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "AssemblerConfig",
    # Exception hierarchy
    "C6461Error",
    "AssemblerError",
    "OperandError",
    "UnknownInstructionError",
    "SourceFileError",
    "SourceLocation",
    "ErrorCollector",
]
