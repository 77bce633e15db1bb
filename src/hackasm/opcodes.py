"""
Hack Instruction Set Definition
===============================

This module defines the fixed encoding tables of the Hack 16-bit
architecture: the computation, destination and jump fields of computation
instructions, plus the predefined symbols every program can reference.

Instruction Formats
-------------------
The Hack CPU has two instruction formats, distinguished by bit 15:

1. **Address instruction** (``@value``)
   ```
   0vvv vvvv vvvv vvvv
   ```
   Loads a 15-bit value into the A register.

2. **Computation instruction** (``dest=comp;jump``)
   ```
   111a cccc ccdd djjj
   ```
   - ``a cccccc``: ALU computation (the a-bit selects M instead of A)
   - ``ddd``: destination registers (A, D, M)
   - ``jjj``: jump condition on the ALU output

Each table is a closed enumeration. ``from_mnemonic()`` either returns
the single member for a mnemonic or raises the matching UnknownMnemonicError;
there is no implicit default inside the tables.

Reference
---------
- Nisan & Schocken, The Elements of Computing Systems, chapter 6
"""

from enum import Enum
from typing import Optional

from hackasm.errors import (
    SourceLocation,
    UnknownMnemonicError,
    UnknownComputationError,
    UnknownDestinationError,
    UnknownJumpError,
)


# =============================================================================
# Address Space Constants
# =============================================================================

# Largest value an address instruction can carry (bits 14-0)
MAX_ADDRESS = 0x7FFF

# First RAM slot handed out to variables (R0-R15 occupy 0-15)
VARIABLE_BASE = 16

# Fixed prefix of every computation instruction (bits 15-13)
COMPUTATION_PREFIX = 0b111

# Number of general purpose virtual registers R0..R15
REGISTER_COUNT = 16


# =============================================================================
# Mnemonic Table Base
# =============================================================================

class MnemonicTable(Enum):
    """
    Base class for the fixed opcode tables.

    Every member value is a ``(mnemonic, code)`` pair. Mnemonics are unique
    within a table and each maps to exactly one code.
    """

    @property
    def mnemonic(self) -> str:
        """Source text for this entry."""
        return self.value[0]

    @property
    def code(self) -> int:
        """Bit pattern for this entry."""
        return self.value[1]

    @classmethod
    def error_type(cls) -> type[UnknownMnemonicError]:
        return UnknownMnemonicError

    @classmethod
    def mnemonics(cls) -> list[str]:
        """All recognized mnemonics, in table order."""
        return [member.mnemonic for member in cls if member.mnemonic]

    @classmethod
    def from_mnemonic(
        cls,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> "MnemonicTable":
        """
        Look up a mnemonic.

        Args:
            text: Mnemonic text as written in the source
            location: Source location for error reporting
            source_line: Source text for error reporting

        Returns:
            The matching table member

        Raises:
            UnknownMnemonicError: (subclass per table) if nothing matches
        """
        if text:
            for member in cls:
                if member.mnemonic == text:
                    return member

        raise cls.error_type()(
            text,
            location=location,
            source_line=source_line,
            candidates=cls.mnemonics(),
        )

    def __str__(self) -> str:
        return self.mnemonic or "null"


# =============================================================================
# Computation Table (a-bit + c1..c6)
# =============================================================================

class Computation(MnemonicTable):
    """ALU computations, keyed by expression text."""

    # a = 0: operate on A
    ZERO = ("0", 0b0101010)
    ONE = ("1", 0b0111111)
    MINUS_ONE = ("-1", 0b0111010)
    D = ("D", 0b0001100)
    A = ("A", 0b0110000)
    NOT_D = ("!D", 0b0001101)
    NOT_A = ("!A", 0b0110001)
    NEG_D = ("-D", 0b0001111)
    NEG_A = ("-A", 0b0110011)
    D_PLUS_ONE = ("D+1", 0b0011111)
    A_PLUS_ONE = ("A+1", 0b0110111)
    D_MINUS_ONE = ("D-1", 0b0001110)
    A_MINUS_ONE = ("A-1", 0b0110010)
    D_PLUS_A = ("D+A", 0b0000010)
    D_MINUS_A = ("D-A", 0b0010011)
    A_MINUS_D = ("A-D", 0b0000111)
    D_AND_A = ("D&A", 0b0000000)
    D_OR_A = ("D|A", 0b0010101)

    # a = 1: operate on M
    M = ("M", 0b1110000)
    NOT_M = ("!M", 0b1110001)
    NEG_M = ("-M", 0b1110011)
    M_PLUS_ONE = ("M+1", 0b1110111)
    M_MINUS_ONE = ("M-1", 0b1110010)
    D_PLUS_M = ("D+M", 0b1000010)
    D_MINUS_M = ("D-M", 0b1010011)
    M_MINUS_D = ("M-D", 0b1000111)
    D_AND_M = ("D&M", 0b1000000)
    D_OR_M = ("D|M", 0b1010101)

    @classmethod
    def error_type(cls) -> type[UnknownMnemonicError]:
        return UnknownComputationError


# =============================================================================
# Destination Table (d1 d2 d3 = A D M)
# =============================================================================

class Destination(MnemonicTable):
    """Registers receiving the ALU output, keyed by register combination."""

    NULL = ("", 0b000)
    M = ("M", 0b001)
    D = ("D", 0b010)
    DM = ("DM", 0b011)
    A = ("A", 0b100)
    AM = ("AM", 0b101)
    AD = ("AD", 0b110)
    ADM = ("ADM", 0b111)

    @classmethod
    def error_type(cls) -> type[UnknownMnemonicError]:
        return UnknownDestinationError


# =============================================================================
# Jump Table (j1 j2 j3 = out<0, out=0, out>0)
# =============================================================================

class Jump(MnemonicTable):
    """Jump conditions on the ALU output, keyed by condition mnemonic."""

    NULL = ("", 0b000)
    JGT = ("JGT", 0b001)
    JEQ = ("JEQ", 0b010)
    JGE = ("JGE", 0b011)
    JLT = ("JLT", 0b100)
    JNE = ("JNE", 0b101)
    JLE = ("JLE", 0b110)
    JMP = ("JMP", 0b111)

    @classmethod
    def error_type(cls) -> type[UnknownMnemonicError]:
        return UnknownJumpError


# =============================================================================
# Predefined Symbols
# =============================================================================
# Virtual machine pointers, the sixteen virtual registers and the two
# memory-mapped I/O bases. SP/LCL/ARG/THIS/THAT alias R0-R4 by design of
# the architecture.
# =============================================================================

PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{i}": i for i in range(REGISTER_COUNT)},
    "SCREEN": 0x4000,
    "KBD": 0x6000,
}
