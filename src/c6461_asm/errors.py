"""
C6461 Assembler Error Hierarchy
===============================

This module defines the exception hierarchy for the C6461 assembler.
All exceptions inherit from C6461Error, allowing callers to catch all
assembler-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
C6461Error (base)
└── AssemblerError (assembler-related)
    ├── OperandError - malformed numeric operand (LOC, DATA, instruction)
    ├── UnknownInstructionError - unrecognised mnemonic or directive
    └── SourceFileError - source cannot be opened or read (fatal)

Per-line errors (OperandError, UnknownInstructionError) never stop an
assembly run. They are recorded in an ErrorCollector and reported after
both passes complete. SourceFileError is raised immediately and aborts
the run.

Error messages follow this format:
    filename:line: error: description
        source_line_text
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class C6461Error(Exception):
    """
    Base exception for all C6461 assembler errors.

    Callers can catch every error raised by the package with one clause:

        try:
            assembler.assemble_file("source.txt")
        except C6461Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed), 0 when not meaningful
    """
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        """Format as 'filename:line[:column]' for error messages."""
        if self.column > 0:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(C6461Error):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The trimmed source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            source.txt:4: error: invalid numeric operand: 'x1'
                DATA x1
            hint: DATA takes a decimal value or a defined label
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None:
            parts.append(f"    {self.source_line}")
            if self.location is not None and self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class OperandError(AssemblerError):
    """
    Malformed numeric operand.

    Raised when an origin directive, data directive, or instruction operand
    does not parse as a decimal integer, or when it is missing where one is
    required. A DATA operand naming an undefined label ends up here too,
    since it falls back to decimal parsing.

    Attributes:
        operand: The offending operand text ("" when missing)
    """

    def __init__(
        self,
        message: str,
        operand: str = "",
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        super().__init__(message, location, hint, source_line)


class UnknownInstructionError(AssemblerError):
    """
    A line whose head token is not LOC, DATA, End: or one of the five
    supported mnemonics.

    Only the second pass reports this; the first pass ignores unknown
    tokens.
    """

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        super().__init__(
            f"unknown instruction '{mnemonic}'",
            location=location,
            hint="supported: LDR, LDA, LDX, JZ, HLT, LOC, DATA, End:",
            source_line=source_line,
        )


class SourceFileError(AssemblerError):
    """
    The source file cannot be opened or read.

    This is the only fatal error: it aborts the run before either pass
    completes.
    """

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"cannot read source file '{filename}': {reason}")


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects per-line errors for batch reporting.

    The assembler uses this to keep going after a bad line, collecting
    every error before reporting them together. Diagnostics live here and
    never in the listing or load output.

    Example:
        collector = ErrorCollector()
        collector.add(OperandError("missing operand", ...))

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self):
        self.errors: list[AssemblerError] = []
        self.warnings: list[str] = []

    def add(self, error: AssemblerError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def warning_count(self) -> int:
        """Return the number of collected warnings."""
        return len(self.warnings)

    def report(self) -> str:
        """
        Format all errors and warnings for display.

        Returns:
            Formatted string with all errors, warnings and a summary line
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  {warning}")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"\n{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors and warnings."""
        self.errors.clear()
        self.warnings.clear()
