"""
C6461 Instruction Set Definition
================================

This module defines the subset of the C6461 instruction set understood by
the assembler: five instructions and three directives.

Machine Word Layout
-------------------
The nominal 16-bit machine word is divided into fixed fields:

    Bits 15-10 : Opcode (6 bits)
    Bits  9-8  : R  - general purpose register (0-3)
    Bits  7-6  : IX - index register (0-3)
    Bit   5    : I  - indirect addressing flag
    Bits  4-0  : Address / immediate value (5 bits, 0-31)

The encodings below are the ones the existing toolchain emits. They place
fields at per-instruction positions and some base values are wider than
16 bits (LDX sets 0x102000). Words are emitted exactly as computed, so
simulator load files stay compatible.

Instructions
------------
    LDX x,addr         0x102000 + (x << 9) + addr
    LDR r,x,addr[,I]   (r << 13) + (x << 9) + addr, plus 0x400 if I is given
    LDA r,x,addr       0x006000 + (r << 13) + (x << 9) + addr
    JZ  r,x,addr       0x020000 + (r << 9) + (x << 5) + addr
    HLT                0

Fields are combined with bitwise OR; "+" above reads the same for the
non-overlapping cases.

Directives
----------
- LOC n   : set the location counter to n (origin)
- DATA v  : emit one word holding v (decimal or a label's address)
- End:    : end marker, emits a zero word without advancing

All mnemonics and directives match case-insensitively.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Word Field Constants
# =============================================================================

# Indirect bit as placed by LDR when a fourth operand field is present
LDR_INDIRECT_FLAG = 0x000400


# =============================================================================
# Directive Names
# =============================================================================

ORIGIN_DIRECTIVE = "LOC"
DATA_DIRECTIVE = "DATA"
END_MARKER = "END:"  # includes its trailing colon


# =============================================================================
# Instruction Information
# =============================================================================

@dataclass(frozen=True)
class InstructionInfo:
    """
    Encoding recipe for one instruction.

    The encoder starts from ``base`` and ORs in operand field ``i`` shifted
    left by ``field_shifts[i]``. When ``indirect_flag`` is set and the
    operand list carries more fields than ``field_shifts`` names, the flag
    is ORed in as well.

    Attributes:
        base: Fixed bits of the word (opcode and constant bits)
        operands: Operand field names, in source order (for messages)
        field_shifts: Left shift applied to each operand field
        indirect_flag: Bit set by a trailing extra field, or None
    """
    base: int
    operands: tuple[str, ...]
    field_shifts: tuple[int, ...]
    indirect_flag: Optional[int] = None

    def __repr__(self) -> str:
        ops = ",".join(self.operands) or "-"
        return f"InstructionInfo(base=0x{self.base:06X}, operands={ops})"


# =============================================================================
# Opcode Table
# =============================================================================
# Key: upper-case mnemonic
# Value: InstructionInfo(base, operand names, field shifts, indirect flag)
# =============================================================================

OPCODE_TABLE: dict[str, InstructionInfo] = {
    # Load index register: LDX x,address
    "LDX": InstructionInfo(0x102000, ("x", "address"), (9, 0)),
    # Load register from memory: LDR r,x,address[,I]
    "LDR": InstructionInfo(
        0x000000, ("r", "x", "address"), (13, 9, 0),
        indirect_flag=LDR_INDIRECT_FLAG,
    ),
    # Load register with address: LDA r,x,address
    "LDA": InstructionInfo(0x006000, ("r", "x", "address"), (13, 9, 0)),
    # Jump if zero: JZ r,x,address
    "JZ": InstructionInfo(0x020000, ("r", "x", "address"), (9, 5, 0)),
    # Halt
    "HLT": InstructionInfo(0x000000, (), ()),
}

MNEMONICS = frozenset(OPCODE_TABLE)

# Constructs that consume exactly one word. The end marker emits a word
# but leaves the location counter alone, so it is not listed.
WORD_ALLOCATING = MNEMONICS | {DATA_DIRECTIVE}


# =============================================================================
# Lookup Functions
# =============================================================================

def get_instruction_info(mnemonic: str) -> Optional[InstructionInfo]:
    """Return the encoding recipe for a mnemonic (any case), or None."""
    if mnemonic is None:
        return None
    return OPCODE_TABLE.get(mnemonic.upper())


def is_origin_directive(token: Optional[str]) -> bool:
    """True for LOC in any case."""
    return token is not None and token.upper() == ORIGIN_DIRECTIVE


def is_end_marker(token: Optional[str]) -> bool:
    """True for End: in any case (the colon is part of the token)."""
    return token is not None and token.upper() == END_MARKER
