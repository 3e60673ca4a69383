# =============================================================================
# test_lexer.py - Line Classifier Tests
# =============================================================================
# Unit tests for the C6461 line classification helpers.
#
# Test coverage includes:
#   - Blank and comment line detection
#   - Trailing comment removal
#   - Head/tail splitting
#   - Label peeling
#   - Operand splitting and decimal parsing
# =============================================================================

import pytest

from c6461_asm.assembler.lexer import (
    HeadTail,
    LineParts,
    is_blank_or_comment,
    strip_trailing_comment,
    split_head_and_tail,
    starts_with_label,
    peel_label,
    split_operands,
    first_token,
    parse_decimal,
)
from c6461_asm.errors import OperandError


# =============================================================================
# Blank and Comment Lines
# =============================================================================

class TestBlankOrComment:
    """Test blank/comment line detection."""

    @pytest.mark.parametrize("line", ["", "   ", "\t", ";", "; a comment", "   ; indented"])
    def test_blank_or_comment(self, line):
        assert is_blank_or_comment(line)

    @pytest.mark.parametrize("line", ["HLT", "LOC 6", "LOOP:", "LDA 1,0,5 ; trailing"])
    def test_statement_lines(self, line):
        assert not is_blank_or_comment(line)


# =============================================================================
# Comment Stripping
# =============================================================================

class TestStripTrailingComment:
    """Test removal of trailing comments."""

    def test_removes_comment(self):
        assert strip_trailing_comment("1,0,5 ; load") == "1,0,5"

    def test_no_comment_is_trimmed(self):
        assert strip_trailing_comment("  1,0,5  ") == "1,0,5"

    def test_cuts_at_first_semicolon(self):
        assert strip_trailing_comment("7 ; one ; two") == "7"

    def test_comment_only(self):
        assert strip_trailing_comment("; nothing") == ""

    def test_none(self):
        assert strip_trailing_comment(None) == ""


# =============================================================================
# Head / Tail Splitting
# =============================================================================

class TestSplitHeadAndTail:
    """Test splitting a line at the first whitespace run."""

    def test_head_and_tail(self):
        assert split_head_and_tail("LDX 2,5") == HeadTail("LDX", "2,5")

    def test_head_only(self):
        assert split_head_and_tail("HLT") == HeadTail("HLT", None)

    def test_whitespace_run_and_trim(self):
        result = split_head_and_tail("   LDR \t 3,0,10 ; c  ")
        assert result.head == "LDR"
        assert result.tail == "3,0,10 ; c"

    def test_tail_keeps_inner_spacing(self):
        assert split_head_and_tail("START: LOC  10").tail == "LOC  10"

    def test_empty_has_no_tokens(self):
        assert split_head_and_tail("") is None
        assert split_head_and_tail("    ") is None
        assert split_head_and_tail(None) is None

    def test_first_token(self):
        assert first_token("10 ; origin") == "10"
        assert first_token("") is None


# =============================================================================
# Label Peeling
# =============================================================================

class TestPeelLabel:
    """Test separating a label from the statement that follows it."""

    def test_label_only(self):
        assert peel_label("LOOP:") == LineParts("LOOP", None)

    def test_label_with_statement(self):
        assert peel_label("START: LOC 10") == LineParts("START", "LOC 10")

    def test_no_label_keeps_original_line(self):
        assert peel_label("LDX 2,5") == LineParts(None, "LDX 2,5")

    def test_label_case_preserved(self):
        assert peel_label("MyLabel: HLT").label == "MyLabel"

    def test_empty_line(self):
        assert peel_label("") == LineParts(None, None)

    def test_starts_with_label(self):
        assert starts_with_label("X: HLT")
        assert starts_with_label("End:")
        assert not starts_with_label("HLT")
        assert not starts_with_label("")


# =============================================================================
# Operands
# =============================================================================

class TestSplitOperands:
    """Test comma-separated operand splitting."""

    def test_fields_trimmed(self):
        assert split_operands(" 1 , 2 ,3") == ["1", "2", "3"]

    def test_comment_stripped(self):
        assert split_operands("3,0,10,1 ; indirect") == ["3", "0", "10", "1"]

    def test_empty(self):
        assert split_operands("") == []
        assert split_operands(None) == []
        assert split_operands("; only a comment") == []

    def test_trailing_empty_fields_dropped(self):
        assert split_operands("1,2,") == ["1", "2"]
        assert split_operands("1,2,,,") == ["1", "2"]

    def test_inner_empty_field_kept(self):
        assert split_operands("1,,3") == ["1", "", "3"]


class TestParseDecimal:
    """Test strict decimal parsing."""

    @pytest.mark.parametrize("text,value", [("0", 0), ("10", 10), ("+7", 7), ("-1", -1), ("007", 7)])
    def test_valid(self, text, value):
        assert parse_decimal(text) == value

    @pytest.mark.parametrize("text", ["abc", "0x10", "1_000", "1.5", " 1", "10;"])
    def test_invalid(self, text):
        with pytest.raises(OperandError) as exc_info:
            parse_decimal(text)
        assert exc_info.value.operand == text

    def test_missing(self):
        with pytest.raises(OperandError, match="missing operand"):
            parse_decimal(None)
        with pytest.raises(OperandError, match="missing operand"):
            parse_decimal("")

    @pytest.mark.parametrize("text,value", [
        ("2147483647", 2147483647),
        ("-2147483648", -2147483648),
        ("0000000000002147483647", 2147483647),
    ])
    def test_signed_word_limits(self, text, value):
        assert parse_decimal(text) == value

    @pytest.mark.parametrize("text", ["2147483648", "-2147483649", "4294967296", "99999999999"])
    def test_out_of_range(self, text):
        with pytest.raises(OperandError, match="out of range") as exc_info:
            parse_decimal(text)
        assert exc_info.value.operand == text

    def test_huge_operand_is_operand_error(self):
        text = "9" * 5000
        with pytest.raises(OperandError, match="out of range") as exc_info:
            parse_decimal(text)
        assert exc_info.value.operand == text
        assert len(exc_info.value.message) < 100

    def test_long_run_of_leading_zeros(self):
        assert parse_decimal("0" * 5000 + "12") == 12
        assert parse_decimal("-" + "0" * 5000) == 0
