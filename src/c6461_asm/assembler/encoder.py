"""
C6461 Instruction Encoder
=========================

Maps a mnemonic and its raw operand text to a machine word. Encoding is
pure: the same input always yields the same word and no assembler state
is touched.

Operand text is comment-stripped, split on commas and trimmed. A field
that is absent defaults to 0 instead of raising, so ``LDA 1`` encodes as
``LDA 1,0,0``. A field that is present but not a decimal integer raises
OperandError.

Example
-------
>>> from c6461_asm.assembler.encoder import encode_instruction
>>> hex(encode_instruction("LDA", "1,2,5"))
'0x6405'
>>> encode_instruction("HLT", "")
0
"""

from typing import Optional

from c6461_asm.assembler.lexer import parse_decimal, split_operands
from c6461_asm.cpu import get_instruction_info


class OperandFields:
    """
    Comma-separated operand fields of one instruction.

    Fields are read through field_or_default(), which makes the "missing
    means zero" rule explicit at every call site.
    """

    def __init__(self, text: Optional[str]):
        self._fields = split_operands(text)

    def field_or_default(self, index: int, default: int = 0) -> int:
        """
        Parse field ``index`` as a decimal integer.

        Returns default when the field does not exist.

        Raises:
            OperandError: If the field exists but is not a decimal integer
        """
        if index >= len(self._fields):
            return default
        return parse_decimal(self._fields[index])

    def has_field(self, index: int) -> bool:
        return index < len(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"OperandFields({self._fields!r})"


def encode_instruction(mnemonic: str, operand_text: Optional[str]) -> int:
    """
    Encode one instruction into its machine word.

    Args:
        mnemonic: Instruction mnemonic, any case
        operand_text: Everything after the mnemonic (may hold a comment)

    Returns:
        The encoded word; 0 for a mnemonic the instruction set does not know

    Raises:
        OperandError: If a present operand field is not a decimal integer
    """
    info = get_instruction_info(mnemonic)
    if info is None:
        return 0

    fields = OperandFields(operand_text)
    word = info.base
    for index, shift in enumerate(info.field_shifts):
        word |= fields.field_or_default(index) << shift

    # The extra field's content is never inspected, only its presence
    if info.indirect_flag is not None and fields.has_field(len(info.field_shifts)):
        word |= info.indirect_flag

    return word
