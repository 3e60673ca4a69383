"""
C6461 Assembly Line Classifier
==============================

C6461 source is line oriented: one statement per line, ``;`` starts a
comment that runs to the end of the line, a first token ending in ``:``
is a label, and operands are separated by commas. There is no token
stream; each line is taken apart with a handful of string helpers.

Line Categories
---------------
- blank or comment:  ``""``, ``"   "``, ``"; note"``
- label-bearing:     ``"LOOP:"``, ``"START: LOC 10"``
- directive:         ``"LOC 6"``, ``"DATA 10"``, ``"End:"``
- instruction:       ``"LDR 3,0,10,1 ; indirect"``

Example
-------
>>> from c6461_asm.assembler.lexer import peel_label, split_head_and_tail
>>> peel_label("START: LOC 10")
LineParts(label='START', rest='LOC 10')
>>> split_head_and_tail("LDX 2,5")
HeadTail(head='LDX', tail='2,5')
"""

from dataclasses import dataclass
from typing import Optional
import re

from c6461_asm.errors import OperandError


COMMENT_CHAR = ";"
LABEL_SUFFIX = ":"
OPERAND_SEPARATOR = ","

# Optional sign followed by ASCII digits, nothing else
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

# Operands must fit a signed 32-bit word
INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1
_MAX_DIGITS = len(str(INT_MAX))


# =============================================================================
# Line Structures
# =============================================================================

@dataclass(frozen=True)
class HeadTail:
    """
    A line split at its first run of whitespace.

    Attributes:
        head: The leading token (never empty)
        tail: Everything after the whitespace run, or None if absent
    """
    head: str
    tail: Optional[str] = None


@dataclass(frozen=True)
class LineParts:
    """
    A line with its label peeled off.

    Attributes:
        label: Label name without the trailing colon, or None
        rest: Remaining statement text, or None for a label-only line
    """
    label: Optional[str]
    rest: Optional[str]


# =============================================================================
# Classification Helpers
# =============================================================================

def is_blank_or_comment(line: Optional[str]) -> bool:
    """True if the line is empty after trimming or starts with ';'."""
    if line is None:
        return True
    trimmed = line.strip()
    return not trimmed or trimmed.startswith(COMMENT_CHAR)


def strip_trailing_comment(text: Optional[str]) -> str:
    """
    Remove everything from the first ';' to the end of the text.

    The result is trimmed. None is treated as empty text.
    """
    if text is None:
        return ""
    index = text.find(COMMENT_CHAR)
    if index >= 0:
        text = text[:index]
    return text.strip()


def split_head_and_tail(line: Optional[str]) -> Optional[HeadTail]:
    """
    Split trimmed text on the first run of whitespace.

    Returns:
        HeadTail(head, tail), with tail None when there is only one token,
        or None when the trimmed line is empty
    """
    if line is None:
        return None
    parts = line.strip().split(None, 1)
    if not parts:
        return None
    tail = parts[1] if len(parts) > 1 else None
    return HeadTail(parts[0], tail)


def starts_with_label(line: Optional[str]) -> bool:
    """True if the first whitespace-delimited token ends with ':'."""
    head_tail = split_head_and_tail(line)
    return head_tail is not None and head_tail.head.endswith(LABEL_SUFFIX)


def peel_label(line: Optional[str]) -> LineParts:
    """
    Separate a leading label from the rest of the statement.

    ``"LOOP: LDA 1,0,5"`` gives ``LineParts("LOOP", "LDA 1,0,5")`` and
    ``"LOOP:"`` gives ``LineParts("LOOP", None)``. Without a label the
    rest is the original line, untouched.
    """
    head_tail = split_head_and_tail(line)
    if head_tail is None:
        return LineParts(None, None)

    if head_tail.head.endswith(LABEL_SUFFIX):
        label = head_tail.head[:-len(LABEL_SUFFIX)]
        rest = head_tail.tail
        if rest is None or not rest.strip():
            return LineParts(label, None)
        return LineParts(label, rest.strip())

    return LineParts(None, line)


# =============================================================================
# Operand Helpers
# =============================================================================

def split_operands(text: Optional[str]) -> list[str]:
    """
    Split operand text on commas into trimmed fields.

    The trailing comment is removed first. Empty operand text has no
    fields, and empty fields at the end of the list are dropped, so
    ``"1,2,"`` has two fields while ``"1,,3"`` has three (the middle one
    empty).
    """
    cleaned = strip_trailing_comment(text)
    if not cleaned:
        return []
    fields = cleaned.split(OPERAND_SEPARATOR)
    while fields and fields[-1] == "":
        fields.pop()
    return [f.strip() for f in fields]


def first_token(text: Optional[str]) -> Optional[str]:
    """Return the first whitespace-delimited token of text, or None."""
    head_tail = split_head_and_tail(text)
    return head_tail.head if head_tail else None


def parse_decimal(text: Optional[str]) -> int:
    """
    Parse a strict decimal integer.

    Accepts an optional sign and ASCII digits, with a value in the signed
    32-bit range. Anything else, including an empty or missing operand,
    raises OperandError.
    """
    if text is None or text == "":
        raise OperandError("missing operand", operand="")
    if not _DECIMAL_RE.fullmatch(text):
        raise OperandError(f"invalid numeric operand '{text}'", operand=text)

    # Leading zeros are allowed, so count significant digits only
    significant = text.lstrip("+-").lstrip("0")
    if len(significant) > _MAX_DIGITS:
        raise _out_of_range(text)
    value = int(significant or "0")
    if text.startswith("-"):
        value = -value
    if not INT_MIN <= value <= INT_MAX:
        raise _out_of_range(text)
    return value


def _out_of_range(text: str) -> OperandError:
    shown = text if len(text) <= 20 else f"{text[:17]}..."
    return OperandError(
        f"numeric operand out of range '{shown}'",
        operand=text,
        hint=f"values must lie between {INT_MIN} and {INT_MAX}",
    )
