"""
C6461 Assembler
===============

This package provides a two-pass assembler for the C6461 teaching
machine. It turns line-oriented assembly source into a human-readable
listing and a load file for the simulator.

Main Components
---------------
- **Assembler**: Main assembler class that runs both passes
- **lexer**: Line classification helpers (comments, labels, operands)
- **SymbolTable / LocationCounter**: State shared by the passes
- **SymbolCollector**: Pass 1, label addresses
- **CodeGenerator**: Pass 2, encoding and output
- **encode_instruction**: Pure instruction encoder

Assembly Process
----------------
1. **Pass 1 (SymbolCollector)**:
   - Bind labels to the location counter
   - Follow LOC and count word-allocating lines

2. **Pass 2 (CodeGenerator)**:
   - Resolve DATA operands, encode instructions
   - Emit listing and load lines, collect per-line errors

Example Usage
-------------
>>> from c6461_asm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string('''
... LOC 6
... LDX 2,7
... End:
... ''')
>>> print(asm.get_listing())

Supported Features
------------------
- Instructions: LDR, LDA, LDX, JZ, HLT
- Directives: LOC, DATA, End:
- Labels (on their own line), forward references from DATA
- Listing, load and symbol file output
"""

from c6461_asm.assembler.assembler import Assembler, assemble, assemble_file
from c6461_asm.assembler.lexer import (
    HeadTail,
    LineParts,
    is_blank_or_comment,
    strip_trailing_comment,
    split_head_and_tail,
    peel_label,
    split_operands,
    parse_decimal,
)
from c6461_asm.assembler.symbols import SymbolTable, LocationCounter
from c6461_asm.assembler.encoder import OperandFields, encode_instruction
from c6461_asm.assembler.codegen import (
    CodeGenerator,
    EmittedWord,
    SymbolCollector,
    format_octal,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Line classifier
    "HeadTail",
    "LineParts",
    "is_blank_or_comment",
    "strip_trailing_comment",
    "split_head_and_tail",
    "peel_label",
    "split_operands",
    "parse_decimal",
    # Assembly state
    "SymbolTable",
    "LocationCounter",
    # Encoder
    "OperandFields",
    "encode_instruction",
    # Passes
    "SymbolCollector",
    "CodeGenerator",
    "EmittedWord",
    "format_octal",
]
