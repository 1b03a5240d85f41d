"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the hackasm package.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (assembler-related)
    ├── FormatError - line does not match any recognized instruction shape
    │   ├── MacroError - malformed indirect or labeled-jump shorthand
    │   └── DuplicateSymbolError - label defined more than once
    └── SymbolLookupError - symbol missing from the table during pass 2

Error Format
------------
Each exception captures source location information (filename, line)
when available. Messages follow this format:

    filename:line: error: description
        source_line_text
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all hackasm errors.

        try:
            translate_file("Prog.asm", "Prog.hack")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Location of a line in the source program.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for error messages."""
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The original source text at the error location (optional)
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
            Prog.asm:7: error: unknown compute mnemonic 'D+2'
                D=D+2
            hint: compute field must be one of the 28 ALU mnemonics
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None:
            parts.append(f"    {self.source_line.strip()}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class FormatError(AssemblerError):
    """
    A line failed to match any recognized instruction shape.

    Raised when a line is not a label declaration, not an address-load
    and not a compute instruction made of known mnemonics. Translation
    stops at the first such line.

    Attributes:
        line_index: 0-based index of the offending line in the source file
        text: Original source text of the offending line
    """

    @property
    def line_index(self) -> Optional[int]:
        if self.location is None:
            return None
        return self.location.line - 1

    @property
    def text(self) -> Optional[str]:
        return self.source_line


class MacroError(FormatError):
    """
    Malformed shorthand instruction.

    Raised when:
    - Brackets are empty, unbalanced or not of the form M[expr]
    - One line uses two different indirect addresses
    - A line combines the indirect and labeled-jump shorthands
    - A labeled jump has an empty condition or label
    """
    pass


class DuplicateSymbolError(FormatError):
    """
    Label defined more than once, or a label shadowing a predefined symbol.
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

        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"
        else:
            hint = f"'{symbol}' is a predefined symbol"

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class SymbolLookupError(AssemblerError, LookupError):
    """
    Symbol referenced during code generation is absent from the table.

    Pass 1 allocates an address for every referenced symbol, so this
    signals a broken resolver rather than a user mistake.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        super().__init__(
            f"undefined symbol '{symbol}'",
            location=location,
            source_line=source_line,
        )
