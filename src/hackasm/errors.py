"""
hackasm Error Hierarchy
=======================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackAsmError, allowing callers to catch every
assembler failure with a single except clause.

Exception Hierarchy
-------------------
HackAsmError (base)
└── AssemblerError (assembly-related)
    ├── AssemblySyntaxError - malformed source line
    ├── DuplicateLabelError - label declared more than once
    ├── AddressRangeError - literal address outside the 15-bit range
    └── UnknownMnemonicError - text matches no opcode table entry
        ├── UnknownComputationError
        ├── UnknownDestinationError
        └── UnknownJumpError

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

import difflib
from dataclasses import dataclass
from typing import Iterable, Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackAsmError(Exception):
    """
    Base exception for all hackasm errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackAsmError as e:
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

class AssemblerError(HackAsmError):
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
            Prog.asm:7:1: error: unknown computation 'D+D'
                D=D+D
                ^
            hint: did you mean 'D+A', 'D+M'?
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
    Syntax error in assembly source code.

    Examples:
        - Unbalanced parentheses in a label declaration: (LOOP
        - Empty label name: ()
        - Address instruction without a target: @
    """
    pass


class DuplicateLabelError(AssemblerError):
    """
    Label declared more than once.

    Also raised when a label tries to rebind a predefined symbol such as
    SCREEN or R0, since predefined addresses are never reassigned.
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
            f"duplicate label '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    Literal address does not fit the 15-bit address field.

    Address instructions carry their value in bits 14-0, so the largest
    literal is 32767.
    """

    def __init__(
        self,
        value: int,
        maximum: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        self.maximum = maximum

        super().__init__(
            f"address {value} is out of range (0-{maximum})",
            location=location,
            hint="larger constants must be built with computation instructions",
            source_line=source_line,
        )


class UnknownMnemonicError(AssemblerError):
    """
    Text that matches no entry of a fixed opcode table.

    Subclasses set ``field`` to name the instruction field involved. Close
    matches from the table are offered as a hint to catch typos.
    """

    field = "mnemonic"

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        candidates: Optional[Iterable[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.similar = difflib.get_close_matches(
            mnemonic, list(candidates or []), n=3, cutoff=0.5
        )

        hint = None
        if self.similar:
            suggestions = ", ".join(f"'{s}'" for s in self.similar)
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown {self.field} '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnknownComputationError(UnknownMnemonicError):
    """Computation expression not in the ALU table (e.g. D+D)."""
    field = "computation"


class UnknownDestinationError(UnknownMnemonicError):
    """Destination register set not in the destination table."""
    field = "destination"


class UnknownJumpError(UnknownMnemonicError):
    """Jump condition not in the jump table."""
    field = "jump"
