# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end integration tests for the C6461 assembler.
# These tests verify the full pipeline from source text to listing and
# load output.
#
# Test coverage includes:
#   - Complete program assembly
#   - Symbol table and forward references
#   - Error reporting with line numbers
#   - File input and output
#   - Edge cases and legacy behaviours
# =============================================================================

import pytest
import textwrap
from pathlib import Path

from c6461_asm import Assembler, assemble, assemble_file
from c6461_asm.errors import (
    C6461Error,
    OperandError,
    SourceFileError,
    UnknownInstructionError,
)


ROUND_TRIP_SOURCE = """\
START: LOC 10
       LDX 2,5
       DATA 7
       HLT
       End:
"""


def asm_string(source: str) -> Assembler:
    asm = Assembler()
    asm.assemble_string(textwrap.dedent(source))
    return asm


# =============================================================================
# Full Assembly Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline from source to outputs."""

    def test_minimal_program(self):
        """Assemble a single HLT."""
        result = assemble("HLT")
        assert result == "000000 000000\n"

    def test_round_trip(self):
        """The classic LOC/LDX/DATA/HLT/End: program."""
        asm = Assembler()
        load = asm.assemble_string(ROUND_TRIP_SOURCE)

        assert load.splitlines() == [
            "000012 4022005",
            "000013 000007",
            "000014 000000",
            "000015 000000",
        ]
        assert asm.get_listing().splitlines() == [
            " START: LOC 10",
            "000012 4022005 LDX 2,5",
            "000013 000007 DATA 7",
            "000014 000000 HLT",
            "000015 000000 End:",
        ]
        assert not asm.has_errors()

    def test_nth_instruction_at_n_minus_one(self):
        source = "\n".join(["LDA 1,0,1", "LDX 1,2", "JZ 0,0,3", "LDR 2,1,4", "HLT"])
        asm = Assembler()
        asm.assemble_string(source)
        assert [w.address for w in asm.get_words()] == [0, 1, 2, 3, 4]

    def test_loc_resumes_incrementing(self):
        asm = asm_string("""
            HLT
            LOC 20
            HLT
            HLT
        """)
        assert [w.address for w in asm.get_words()] == [0, 20, 21]

    def test_program_with_data_table(self):
        asm = asm_string("""
            LOC 6
            DATA 10
            DATA 3
            DATA END
            LOC 24
            LDX 2,7
            LDR 3,0,10
            LDR 2,2,10
            LDR 1,2,10,1
            LDA 0,0,0
            LDX 1,6
            JZ 0,1,0
            HLT
            END:
            HLT
        """)
        assert not asm.has_errors()
        symbols = asm.get_symbols()
        assert symbols["END"] == 32
        words = asm.get_words()
        assert (words[2].address, words[2].word) == (8, 32)
        assert words[3].address == 24
        assert words[6].word == (1 << 13) | (2 << 9) | 10 | 0x400


# =============================================================================
# Symbol Table Tests
# =============================================================================

class TestSymbolTable:
    """Test symbol table functionality."""

    def test_get_symbol_table(self):
        asm = asm_string("""
            FIRST:
            HLT
            LOC 12
            SECOND:
            HLT
        """)
        assert asm.get_symbols() == {"FIRST": 0, "SECOND": 12}

    def test_redefinition_last_wins(self):
        asm = asm_string("""
            X:
            HLT
            X:
            DATA X
        """)
        assert asm.get_symbols()["X"] == 1
        assert asm.get_words()[-1].word == 1
        assert not asm.has_errors()

    def test_case_sensitive_labels(self):
        asm = asm_string("""
            MyLabel:
            DATA MYLABEL
        """)
        assert asm.has_errors()

    def test_fresh_symbols_per_run(self):
        asm = Assembler()
        asm.assemble_string("A:\nHLT")
        asm.assemble_string("B:\nHLT")
        assert asm.get_symbols() == {"B": 0}


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrorHandling:
    """Test per-line error reporting."""

    def test_unparseable_operand_skips_only_that_line(self):
        asm = asm_string("""
            HLT
            DATA twelve
            HLT
        """)
        assert asm.has_errors()
        assert [w.source for w in asm.get_words()] == ["HLT", "HLT"]
        assert "DATA twelve" not in asm.get_listing()
        assert isinstance(asm.get_errors()[0], OperandError)

    def test_unknown_instruction_reported(self):
        asm = asm_string("""
            STR 1,0,5
            HLT
        """)
        errors = asm.get_errors()
        assert len(errors) == 1
        assert isinstance(errors[0], UnknownInstructionError)
        assert asm.get_load() == "000000 000000\n"

    def test_error_report_has_line_numbers(self):
        asm = Assembler()
        asm.assemble_string("HLT\nLDA 1,zz,2\n", "prog.asm")
        report = asm.get_error_report()
        assert "prog.asm:2: error:" in report
        assert "LDA 1,zz,2" in report
        assert "1 error" in report

    def test_errors_are_c6461_errors(self):
        asm = asm_string("NOPE")
        assert all(isinstance(e, C6461Error) for e in asm.get_errors())

    def test_warning_for_label_prefixed_instruction(self):
        asm = asm_string("""
            L: LDX 1,1
        """)
        assert not asm.has_errors()
        assert len(asm.get_warnings()) == 1
        assert asm.get_load() == ""


# =============================================================================
# Edge Cases
# =============================================================================

class TestEdgeCases:
    """Test unusual but valid input."""

    def test_empty_source(self):
        asm = Assembler()
        assert asm.assemble_string("") == ""
        assert asm.get_listing() == ""

    def test_only_comments(self):
        asm = asm_string("""
            ; nothing here
            ; or here
        """)
        assert asm.get_load() == ""
        assert "; nothing here" in asm.get_listing()

    def test_lower_case_program(self):
        asm = asm_string("""
            loc 8
            lda 1,0,2
            data 3
            end:
        """)
        assert not asm.has_errors()
        assert [w.address for w in asm.get_words()] == [8, 9, 10]

    def test_negative_data(self):
        asm = asm_string("DATA -1")
        assert asm.get_load() == "000000 37777777777\n"

    def test_loc_with_comment(self):
        asm = asm_string("""
            LOC 6 ; origin
            HLT
        """)
        assert asm.get_words()[0].address == 6


# =============================================================================
# File I/O Tests
# =============================================================================

class TestFileIO:
    """Test file based assembly."""

    def test_assemble_file_writes_outputs(self, tmp_path):
        source = tmp_path / "source.txt"
        source.write_text(ROUND_TRIP_SOURCE)
        listing = tmp_path / "listing.txt"
        load = tmp_path / "load.txt"

        asm = Assembler()
        asm.assemble_file(source, listing, load)

        assert load.read_text() == asm.get_load()
        assert listing.read_text() == asm.get_listing()
        assert load.read_text().splitlines()[0] == "000012 4022005"

    def test_assemble_file_without_outputs(self, tmp_path):
        source = tmp_path / "prog.asm"
        source.write_text("DATA 7\n")
        assert assemble_file(source) == "000000 000007\n"
        assert not (tmp_path / "load.txt").exists()

    def test_missing_source_is_fatal(self, tmp_path):
        with pytest.raises(SourceFileError) as exc_info:
            Assembler().assemble_file(tmp_path / "missing.txt", tmp_path / "l.txt", tmp_path / "o.txt")
        assert "missing.txt" in str(exc_info.value)
        assert not (tmp_path / "o.txt").exists()

    def test_file_errors_use_file_name(self, tmp_path):
        source = tmp_path / "bad.asm"
        source.write_text("HLT\nXYZ\n")
        asm = Assembler()
        asm.assemble_file(source)
        assert f"{source}:2" in asm.get_error_report()

    def test_write_listing_and_load(self, tmp_path):
        asm = asm_string("LOC 1\nHLT")
        asm.write_listing(tmp_path / "out.lst")
        asm.write_load(tmp_path / "out.load")
        assert (tmp_path / "out.lst").read_text() == " LOC 1\n000001 000000 HLT\n"
        assert (tmp_path / "out.load").read_text() == "000001 000000\n"

    def test_write_symbols(self, tmp_path):
        asm = asm_string("""
            LOC 8
            B:
            HLT
            A:
        """)
        path = tmp_path / "prog.sym"
        asm.write_symbols(path)
        lines = [l for l in path.read_text().splitlines() if not l.startswith("#")]
        assert lines == ["A 000011", "B 000010"]
