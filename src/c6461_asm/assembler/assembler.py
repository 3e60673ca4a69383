"""
C6461 Assembler - Main Interface
================================

This module provides the main Assembler class, the primary interface for
assembling C6461 source. It runs the symbol collector and the code
generator over the source and keeps their results for output.

Example Usage
-------------
>>> from c6461_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... LOC 6
... LDX 2,7
... LDR 3,0,10
... HLT
... End:
... ''')
>>>
>>> print(asm.get_load())
>>> asm.write_listing("listing.txt")

Command-Line Usage
------------------
The assembler can also be invoked from the command line:

    $ c6461asm source.txt -l listing.txt -o load.txt -s symbols.txt

Options:
    -l, --listing FILE     Listing file (default: listing.txt)
    -o, --load FILE        Load file (default: load.txt)
    -s, --symbols FILE     Generate symbol file
    -v, --verbose          Verbose output
"""

from contextlib import ExitStack
from pathlib import Path
from typing import Iterable, Optional
import logging

from c6461_asm.assembler.codegen import (
    CodeGenerator,
    EmittedWord,
    SymbolCollector,
    format_octal,
)
from c6461_asm.assembler.symbols import SymbolTable
from c6461_asm.config import AssemblerConfig
from c6461_asm.errors import AssemblerError, ErrorCollector, SourceFileError

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main C6461 assembler class.

    One instance can assemble any number of sources; each call starts
    from an empty symbol table and error list. Results of the last run
    are available through the get_* and write_* methods.

    Attributes:
        config: File names and encoding used for file based assembly
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        """
        Initialize the assembler.

        Args:
            config: Run configuration. Defaults to AssemblerConfig().
        """
        self.config = config or AssemblerConfig()
        self._symbols = SymbolTable()
        self._errors = ErrorCollector()
        self._codegen = CodeGenerator(self._symbols, self._errors)

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> str:
        """
        Assemble source code from a string.

        Per-line errors do not raise; check has_errors() afterwards.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            The load file text
        """
        lines = source.splitlines()
        self._reset(filename)

        logger.info(f"Assembling {filename} ({len(lines)} lines)")
        self._pass1(lines, filename)
        self._codegen.generate(lines)

        return self.get_load()

    def assemble_file(self, filepath: str | Path,
                      listing_path: str | Path | None = None,
                      load_path: str | Path | None = None) -> str:
        """
        Assemble source code from a file.

        The source is read once per pass. When output paths are given the
        listing and load files are open only while pass 2 runs and are
        written line by line.

        Args:
            filepath: Path to assembly source file
            listing_path: Optional listing file to write
            load_path: Optional load file to write

        Returns:
            The load file text

        Raises:
            SourceFileError: If the source file cannot be opened or read
        """
        filepath = Path(filepath)
        filename = str(filepath)
        self._reset(filename)

        logger.info(f"Assembling {filepath}")

        try:
            with open(filepath, encoding=self.config.encoding) as source:
                self._pass1(source, filename)

            with open(filepath, encoding=self.config.encoding) as source:
                if listing_path is None and load_path is None:
                    self._codegen.generate(source)
                else:
                    self._generate_to_files(source, listing_path, load_path)
        except (OSError, UnicodeDecodeError) as e:
            # Output files failing to open are not a source problem
            if isinstance(e, OSError) and e.filename is not None and str(e.filename) != filename:
                raise
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            raise SourceFileError(filename, reason) from e

        return self.get_load()

    def _reset(self, filename: str) -> None:
        self._symbols.clear()
        self._errors.clear()
        self._codegen = CodeGenerator(self._symbols, self._errors, filename)

    def _pass1(self, lines: Iterable[str], filename: str) -> None:
        SymbolCollector(self._symbols, filename).collect(lines)

    def _generate_to_files(self, source: Iterable[str],
                           listing_path: str | Path | None,
                           load_path: str | Path | None) -> None:
        encoding = self.config.encoding
        with ExitStack() as stack:
            listing = load = None
            if listing_path is not None:
                listing = stack.enter_context(open(listing_path, "w", encoding=encoding))
            if load_path is not None:
                load = stack.enter_context(open(load_path, "w", encoding=encoding))
            self._codegen.generate(source, listing, load)

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping label names to addresses
        """
        return self._symbols.as_dict()

    def get_words(self) -> list[EmittedWord]:
        """
        Get every word emitted by the last run, in source order.

        Returns:
            List of EmittedWord (address, word, source line, line number)
        """
        return self._codegen.get_words()

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Listing with octal addresses, octal words and source lines
        """
        return self._codegen.get_listing()

    def get_load(self) -> str:
        """
        Get the load file contents as a string.

        Returns:
            One "address word" line (both octal) per emitted word
        """
        return self._codegen.get_load()

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write assembly listing file.

        Args:
            filepath: Output file path
        """
        Path(filepath).write_text(self.get_listing(), encoding=self.config.encoding)
        logger.info(f"Wrote listing to {filepath}")

    def write_load(self, filepath: str | Path) -> None:
        """
        Write the load file consumed by the simulator.

        Args:
            filepath: Output file path
        """
        Path(filepath).write_text(self.get_load(), encoding=self.config.encoding)
        logger.info(f"Wrote load file to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (octal), one per line, sorted by name
        """
        with open(filepath, "w", encoding=self.config.encoding) as f:
            f.write("# Symbol table\n")
            f.write("# Generated by c6461asm\n")
            for name in sorted(self._symbols):
                f.write(f"{name} {format_octal(self._symbols.resolve(name))}\n")
        logger.info(f"Wrote symbols to {filepath}")

    # =========================================================================
    # Error Handling
    # =========================================================================

    def has_errors(self) -> bool:
        """
        Check if assembly produced errors.

        Returns:
            True if any line failed to assemble
        """
        return self._errors.has_errors()

    def get_errors(self) -> list[AssemblerError]:
        """Return the per-line errors of the last run."""
        return list(self._errors.errors)

    def get_warnings(self) -> list[str]:
        """Return the warnings of the last run."""
        return list(self._errors.warnings)

    def get_error_report(self) -> str:
        """
        Get formatted error report.

        Returns:
            Error report string
        """
        return self._errors.report()


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> str:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors

    Returns:
        The load file text
    """
    asm = Assembler()
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  listing_path: str | Path | None = None,
                  load_path: str | Path | None = None) -> str:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file
        listing_path: Optional listing file to write
        load_path: Optional load file to write

    Returns:
        The load file text

    Raises:
        SourceFileError: If the source file cannot be read
    """
    asm = Assembler()
    return asm.assemble_file(filepath, listing_path, load_path)
