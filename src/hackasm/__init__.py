"""
hackasm - Two-Pass Assembler for the Hack 16-bit Computer
=========================================================

This package translates Hack assembly source (``.asm``) into Hack machine
code: one 16-bit word per instruction, written as 16-character binary text
lines in ``.hack`` files.

Main Components
---------------
- **Assembler**: orchestrates parsing, label collection and encoding
- **SymbolTable**: predefined symbols, labels and variables for one run
- **Computation / Destination / Jump**: the fixed opcode tables
- **hackasm** command: click-based command-line front end

Quick Start
-----------
    >>> from hackasm import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_string("@2\\nD=A\\n@3\\nD=D+A\\n@0\\nM=D")
    [2, 60432, 3, 57488, 0, 58120]

Or from the command line:
    $ hackasm Add.asm            # writes Add.hack
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.assembler import Assembler, assemble, assemble_file
from hackasm.encoder import encode_address, encode_computation, encode_fields, format_word
from hackasm.errors import (
    HackAsmError,
    SourceLocation,
    AssemblerError,
    AssemblySyntaxError,
    DuplicateLabelError,
    AddressRangeError,
    UnknownMnemonicError,
    UnknownComputationError,
    UnknownDestinationError,
    UnknownJumpError,
)
from hackasm.opcodes import (
    Computation,
    Destination,
    Jump,
    MAX_ADDRESS,
    PREDEFINED_SYMBOLS,
    VARIABLE_BASE,
)
from hackasm.parser import (
    Statement,
    LabelDef,
    AInstruction,
    CInstruction,
    parse_lines,
    parse_source,
)
from hackasm.symbols import Symbol, SymbolKind, SymbolTable

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    # Encoder
    "encode_address",
    "encode_computation",
    "encode_fields",
    "format_word",
    # Exception hierarchy
    "HackAsmError",
    "SourceLocation",
    "AssemblerError",
    "AssemblySyntaxError",
    "DuplicateLabelError",
    "AddressRangeError",
    "UnknownMnemonicError",
    "UnknownComputationError",
    "UnknownDestinationError",
    "UnknownJumpError",
    # Opcode tables
    "Computation",
    "Destination",
    "Jump",
    "MAX_ADDRESS",
    "PREDEFINED_SYMBOLS",
    "VARIABLE_BASE",
    # Parser
    "Statement",
    "LabelDef",
    "AInstruction",
    "CInstruction",
    "parse_lines",
    "parse_source",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
]
