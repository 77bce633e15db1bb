"""
Hack Instruction Encoder
========================

Builds 16-bit machine words from resolved instruction fields.

Address instructions:      0vvv vvvv vvvv vvvv
Computation instructions:  111a cccc ccdd djjj
"""

import logging
from typing import Optional

from hackasm.errors import AddressRangeError, SourceLocation, UnknownMnemonicError
from hackasm.opcodes import (
    COMPUTATION_PREFIX,
    MAX_ADDRESS,
    Computation,
    Destination,
    Jump,
    MnemonicTable,
)

logger = logging.getLogger(__name__)

WORD_BITS = 16


def encode_address(address: int,
                   location: Optional[SourceLocation] = None,
                   source_line: Optional[str] = None) -> int:
    """
    Encode an address instruction.

    Raises:
        AddressRangeError: If the address does not fit in 15 bits
    """
    if not 0 <= address <= MAX_ADDRESS:
        raise AddressRangeError(address, MAX_ADDRESS, location, source_line)
    return address


def encode_computation(comp: Computation,
                       dest: Destination = Destination.NULL,
                       jump: Jump = Jump.NULL) -> int:
    """Encode a computation instruction from its table entries."""
    return (COMPUTATION_PREFIX << 13) | (comp.code << 6) | (dest.code << 3) | jump.code


def _resolve_field(table: type[MnemonicTable], text: Optional[str], strict: bool,
                   location: Optional[SourceLocation],
                   source_line: Optional[str]) -> MnemonicTable:
    # Absent field: no '=' or no ';' in the instruction
    if text is None:
        return table.NULL

    try:
        return table.from_mnemonic(text, location, source_line)
    except UnknownMnemonicError as e:
        if strict:
            raise
        logger.warning(f"{e.location or '<input>'}: unknown {e.field} '{text}' encoded as null")
        return table.NULL


def encode_fields(comp: str, dest: Optional[str] = None, jump: Optional[str] = None,
                  strict: bool = True,
                  location: Optional[SourceLocation] = None,
                  source_line: Optional[str] = None) -> int:
    """
    Encode a computation instruction from its source text fields.

    Args:
        comp: Computation expression (always required)
        dest: Destination text, None when absent
        jump: Jump text, None when absent
        strict: If False, unknown destination/jump text encodes as 000
            instead of failing. Unknown computations always fail.
        location: Source location for error reporting
        source_line: Source text for error reporting

    Raises:
        UnknownComputationError, UnknownDestinationError, UnknownJumpError
    """
    dest_entry = _resolve_field(Destination, dest, strict, location, source_line)
    jump_entry = _resolve_field(Jump, jump, strict, location, source_line)
    comp_entry = Computation.from_mnemonic(comp, location, source_line)
    return encode_computation(comp_entry, dest_entry, jump_entry)


def format_word(word: int) -> str:
    """Render a machine word as a 16-character binary string."""
    return f"{word:0{WORD_BITS}b}"
