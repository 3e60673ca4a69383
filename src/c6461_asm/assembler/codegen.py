"""
C6461 Code Generator
====================

This module implements the two assembly passes over C6461 source lines.

Pass 1 (Symbol Collection)
--------------------------
- Skip blank and comment lines
- Bind each label to the current location counter
- Follow LOC, advance past instructions and DATA
- Ignore anything it does not recognise (pass 2 reports it)

Pass 2 (Code Generation)
------------------------
- Re-walk the source with the counter back at 0
- Resolve DATA operands against the symbol table
- Encode instructions and emit listing and load lines
- Record per-line errors and carry on with the next line

The passes dispatch through separate tables: pass 1 is permissive and
only tracks addresses, pass 2 is strict and reports unknown statements.

Output Formats
--------------
Listing, one line per source line::

    000012 4022005 LDX 2,5        emitted word: octal address, word, source
     LOC 10                       origin directive: one leading space
    ; comment                     everything else: trimmed source

Load file, one line per emitted word::

    000012 4022005
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, TextIO
import logging

from c6461_asm.errors import (
    AssemblerError,
    OperandError,
    UnknownInstructionError,
    SourceLocation,
    ErrorCollector,
)
from c6461_asm.assembler.lexer import (
    is_blank_or_comment,
    peel_label,
    split_head_and_tail,
    starts_with_label,
    strip_trailing_comment,
    first_token,
    parse_decimal,
)
from c6461_asm.assembler.encoder import encode_instruction
from c6461_asm.assembler.symbols import SymbolTable, LocationCounter
from c6461_asm.cpu import (
    MNEMONICS,
    WORD_ALLOCATING,
    ORIGIN_DIRECTIVE,
    DATA_DIRECTIVE,
    END_MARKER,
    is_end_marker,
    is_origin_directive,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Output Formatting
# =============================================================================

def format_octal(value: int) -> str:
    """
    Format a value as zero-padded octal, at least six digits.

    Negative values are shown as their 32-bit two's complement, which is
    what the simulator's loader expects.
    """
    return f"{value & 0xFFFFFFFF:06o}"


@dataclass(frozen=True)
class EmittedWord:
    """
    One word written to both the listing and the load file.

    Attributes:
        address: Location counter value when the word was emitted
        word: Encoded machine word or data value
        source: Trimmed source line
        line: Source line number (1-based)
    """
    address: int
    word: int
    source: str
    line: int

    def listing_text(self) -> str:
        return f"{format_octal(self.address)} {format_octal(self.word)} {self.source}"

    def load_text(self) -> str:
        return f"{format_octal(self.address)} {format_octal(self.word)}"


# =============================================================================
# Pass 1: Symbol Collection
# =============================================================================

class SymbolCollector:
    """
    First pass: build the symbol table.

    Usage:
        collector = SymbolCollector(symbols)
        collector.collect(source.splitlines())
    """

    def __init__(self, symbols: SymbolTable, filename: str = "<input>"):
        self._symbols = symbols
        self._counter = LocationCounter()
        self._filename = filename

        # Permissive dispatch: upper-case head token -> handler(tail)
        self._dispatch: dict[str, Callable[[Optional[str]], None]] = {
            ORIGIN_DIRECTIVE: self._origin,
        }
        for name in WORD_ALLOCATING:
            self._dispatch[name] = self._allocate

    @property
    def counter(self) -> LocationCounter:
        return self._counter

    def collect(self, lines: Iterable[str]) -> SymbolTable:
        """
        Walk the source once and record every label address.

        Returns:
            The symbol table passed to the constructor
        """
        self._counter.reset()

        for number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if is_blank_or_comment(line):
                continue

            # End: peels like any label, so "DATA End" resolves to its address
            parts = peel_label(line)
            if parts.label is not None:
                self._symbols.define(parts.label, self._counter.get())
            if parts.rest is None:
                continue

            head_tail = split_head_and_tail(parts.rest)
            if head_tail is None:
                continue

            handler = self._dispatch.get(head_tail.head.upper())
            if handler is None:
                continue

            try:
                handler(head_tail.tail)
            except OperandError as e:
                # Reported once, by pass 2, on the same line
                logger.debug(f"{self._filename}:{number}: pass 1 skipped '{line}': {e.message}")

        logger.info(f"Pass 1 complete: {len(self._symbols)} symbols, counter at {self._counter.get()}")
        return self._symbols

    def _origin(self, tail: Optional[str]) -> None:
        self._counter.set_absolute(parse_decimal(first_token(tail)))

    def _allocate(self, tail: Optional[str]) -> None:
        self._counter.advance()


# =============================================================================
# Pass 2: Code Generation
# =============================================================================

class CodeGenerator:
    """
    Second pass: encode statements and emit the listing and load lines.

    The generator keeps the emitted lines so callers can inspect them, and
    can also stream them to open text files as it goes.

    Usage:
        codegen = CodeGenerator(symbols, errors)
        codegen.generate(source.splitlines())
        print(codegen.get_listing())
    """

    def __init__(self, symbols: SymbolTable, errors: ErrorCollector,
                 filename: str = "<input>"):
        self._symbols = symbols
        self._errors = errors
        self._filename = filename
        self._counter = LocationCounter()
        self._listing_lines: list[str] = []
        self._load_lines: list[str] = []
        self._words: list[EmittedWord] = []
        self._listing_out: Optional[TextIO] = None
        self._load_out: Optional[TextIO] = None

        # Strict dispatch: upper-case head token -> handler(tail, line, number)
        self._dispatch: dict[str, Callable[[Optional[str], str, int], None]] = {
            ORIGIN_DIRECTIVE: self._origin,
            DATA_DIRECTIVE: self._data,
            END_MARKER: self._end,
        }
        for mnemonic in MNEMONICS:
            self._dispatch[mnemonic] = self._make_instruction_handler(mnemonic)

    # =========================================================================
    # Public Interface
    # =========================================================================

    @property
    def counter(self) -> LocationCounter:
        return self._counter

    def generate(self, lines: Iterable[str],
                 listing: Optional[TextIO] = None,
                 load: Optional[TextIO] = None) -> list[EmittedWord]:
        """
        Walk the source a second time and emit code.

        Args:
            lines: Source lines (same text pass 1 saw)
            listing: Optional stream receiving listing lines as they are made
            load: Optional stream receiving load lines as they are made

        Returns:
            Every word emitted, in source order
        """
        self._counter.reset()
        self._listing_lines.clear()
        self._load_lines.clear()
        self._words.clear()
        self._listing_out = listing
        self._load_out = load

        try:
            for number, raw in enumerate(lines, start=1):
                try:
                    self._generate_line(raw.strip(), number)
                except AssemblerError as e:
                    self._record(e)
        finally:
            self._listing_out = None
            self._load_out = None

        logger.info(
            f"Pass 2 complete: {len(self._words)} words, "
            f"{self._errors.error_count()} errors"
        )
        return list(self._words)

    def get_listing(self) -> str:
        """Return the listing text (newline terminated)."""
        return "".join(f"{line}\n" for line in self._listing_lines)

    def get_load(self) -> str:
        """Return the load file text (newline terminated)."""
        return "".join(f"{line}\n" for line in self._load_lines)

    def get_words(self) -> list[EmittedWord]:
        return list(self._words)

    # =========================================================================
    # Line Processing
    # =========================================================================

    def _generate_line(self, line: str, number: int) -> None:
        """Process one trimmed source line."""
        if is_blank_or_comment(line):
            self._list(line)
            return

        head_tail = split_head_and_tail(line)

        # End: carries its own colon, so it is matched before label handling
        if is_end_marker(head_tail.head):
            self._end(head_tail.tail, line, number)
            return

        if starts_with_label(line):
            self._labelled_line(line, number)
            return

        handler = self._dispatch.get(head_tail.head.upper())
        if handler is None:
            raise UnknownInstructionError(
                head_tail.head,
                location=SourceLocation(self._filename, number, 1),
                source_line=line,
            )

        try:
            handler(head_tail.tail, line, number)
        except OperandError as e:
            raise self._locate(e, line, number) from e

    def _labelled_line(self, line: str, number: int) -> None:
        """
        Handle a line whose first token is a label.

        The label was bound in pass 1. A label-only line is listed as is.
        A label in front of LOC still moves the counter. A label in front
        of anything else is listed verbatim and not encoded, so labels
        belong on their own line.
        """
        parts = peel_label(line)
        if parts.rest is None:
            self._list(line)
            return

        head_tail = split_head_and_tail(parts.rest)
        if is_origin_directive(head_tail.head):
            try:
                self._origin(head_tail.tail, line, number)
            except OperandError as e:
                raise self._locate(e, line, number) from e
            return

        self._list(line)
        if head_tail.head.upper() in self._dispatch:
            self._errors.add_warning(
                f"{self._filename}:{number}: '{head_tail.head}' after label "
                f"'{parts.label}' is not encoded; put the label on its own line"
            )

    # =========================================================================
    # Statement Handlers
    # =========================================================================

    def _origin(self, tail: Optional[str], line: str, number: int) -> None:
        """LOC n: set the counter, list with a leading space, no load entry."""
        if tail is None:
            raise OperandError("missing operand", hint="LOC takes a decimal address")
        self._counter.set_absolute(parse_decimal(first_token(tail)))
        self._list(f" {line}")

    def _data(self, tail: Optional[str], line: str, number: int) -> None:
        """DATA v: emit a label's address or a decimal literal."""
        token = first_token(strip_trailing_comment(tail)) or ""
        if token in self._symbols:
            value = self._symbols.resolve(token)
        else:
            value = parse_decimal(token)
        self._emit(value, line, number)
        self._counter.advance()

    def _end(self, tail: Optional[str], line: str, number: int) -> None:
        """End: emit a zero word at the current address without advancing."""
        self._emit(0, line, number)

    def _make_instruction_handler(self, mnemonic: str) -> Callable[[Optional[str], str, int], None]:
        def handler(tail: Optional[str], line: str, number: int) -> None:
            word = encode_instruction(mnemonic, tail or "")
            self._emit(word, line, number)
            self._counter.advance()
        return handler

    # =========================================================================
    # Emission Helpers
    # =========================================================================

    def _list(self, text: str) -> None:
        self._listing_lines.append(text)
        if self._listing_out is not None:
            self._listing_out.write(f"{text}\n")

    def _emit(self, word: int, line: str, number: int) -> None:
        emitted = EmittedWord(self._counter.get(), word, line, number)
        self._words.append(emitted)
        self._list(emitted.listing_text())

        load_text = emitted.load_text()
        self._load_lines.append(load_text)
        if self._load_out is not None:
            self._load_out.write(f"{load_text}\n")

        logger.debug(f"{self._filename}:{emitted.line}: {load_text}  {emitted.source}")

    def _locate(self, error: OperandError, line: str, number: int) -> OperandError:
        """Attach the source position to an operand error from the helpers."""
        return OperandError(
            f"error processing line: {error.message}",
            operand=error.operand,
            location=SourceLocation(self._filename, number),
            hint=error.hint,
            source_line=line,
        )

    def _record(self, error: AssemblerError) -> None:
        logger.debug(f"Recorded: {error.message}")
        self._errors.add(error)
