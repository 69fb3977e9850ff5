"""
Mano Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the assembler package.
All exceptions inherit from ManoError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
ManoError (base)
└── AssemblerError (assembler-related)
    ├── AssemblySyntaxError - malformed source line
    ├── UnknownOpcodeError - mnemonic outside the instruction set
    ├── LiteralError - malformed or out-of-range DEC/HEX/ORG literal
    ├── UndefinedSymbolError - unresolved operand (strict mode only)
    └── DuplicateSymbolError - label defined more than once

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
            ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class ManoError(Exception):
    """
    Base exception for all assembler package errors.

        try:
            assembler.assemble_file("program.asm")
        except ManoError as e:
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
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(ManoError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
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
            prog.asm:3:1: error: unknown opcode 'LDX'
                LDX VALUE
                ^
            hint: memory-reference mnemonics are AND, ADD, LDA, ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Malformed assembly source line.

    Examples:
        - Line with more than three tokens (and no indirect marker)
        - DEC, HEX or ORG without an operand
    """
    pass


class UnknownOpcodeError(AssemblerError):
    """
    Mnemonic that belongs to none of the four instruction classes.

    Classification cannot proceed without a known type, so this error
    always aborts the assembly run.
    """

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic

        hint = None
        if mnemonic.upper() != mnemonic:
            hint = f"mnemonics are case-sensitive; did you mean '{mnemonic.upper()}'?"

        super().__init__(
            f"unknown opcode '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class LiteralError(AssemblerError):
    """
    Numeric literal that cannot be encoded.

    Raised for DEC operands that are not base-10 integers, HEX and ORG
    operands that are not base-16 integers, and values outside the range
    a 16-bit word can hold.
    """

    def __init__(
        self,
        directive: str,
        literal: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.directive = directive
        self.literal = literal

        super().__init__(
            f"invalid {directive} operand '{literal}': {reason}",
            location=location,
            source_line=source_line,
        )


class UndefinedSymbolError(AssemblerError):
    """
    Reference to a label that was never defined.

    Only raised when strict symbol resolution is enabled; the default
    policy encodes address 0 and records a warning instead.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        similar_symbols: Optional[list[str]] = None,
    ):
        self.symbol = symbol
        self.similar_symbols = similar_symbols or []

        if not hint and self.similar_symbols:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_symbols[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"undefined symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Label defined more than once.

    Includes the original definition location when available.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Warning Collection
# =============================================================================

class ErrorCollector:
    """
    Collects non-fatal diagnostics for batch reporting.

    Fatal errors abort the run as exceptions; everything the assembler
    tolerates (unresolved symbols under the default policy, truncated
    addresses, ignored operands, redefined labels) is recorded here so the
    caller can show it after assembly.
    """

    def __init__(self):
        self.warnings: list[str] = []

    def add_warning(self, message: str, location: Optional[SourceLocation] = None) -> None:
        """Add a warning message, prefixed with its location if known."""
        if location is not None:
            message = f"{location}: warning: {message}"
        else:
            message = f"warning: {message}"
        self.warnings.append(message)

