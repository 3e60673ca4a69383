"""
C6461 CPU Package
=================

This package contains the C6461 architecture definitions used by the
assembler: the machine word layout, the five supported instructions and
the directive names.

Modules:
    c6461: Instruction set definitions and lookup helpers.

Usage:
    from c6461_asm.cpu import (
        InstructionInfo,
        OPCODE_TABLE,
        get_instruction_info,
    )
"""

# =============================================================================
# Public API Exports
# =============================================================================

from c6461_asm.cpu.c6461 import (
    # Core types
    InstructionInfo,
    # Master instruction database
    OPCODE_TABLE,
    MNEMONICS,
    WORD_ALLOCATING,
    # Directives
    ORIGIN_DIRECTIVE,
    DATA_DIRECTIVE,
    END_MARKER,
    LDR_INDIRECT_FLAG,
    # Lookup functions
    get_instruction_info,
    is_origin_directive,
    is_end_marker,
)

__all__ = [
    "InstructionInfo",
    "OPCODE_TABLE",
    "MNEMONICS",
    "WORD_ALLOCATING",
    "ORIGIN_DIRECTIVE",
    "DATA_DIRECTIVE",
    "END_MARKER",
    "LDR_INDIRECT_FLAG",
    "get_instruction_info",
    "is_origin_directive",
    "is_end_marker",
]
