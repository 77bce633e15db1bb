# =============================================================================
# test_opcodes.py - Opcode Table and Encoder Unit Tests
# =============================================================================
# Tests for the fixed Hack mnemonic tables and the word encoders.
#
# Test coverage includes:
#   - Table completeness and uniqueness
#   - Mnemonic lookup and unknown-mnemonic errors
#   - Address and computation word layout
#   - Strict and permissive field policies
#   - Binary text rendering
# =============================================================================

import logging

import pytest

from hackasm.encoder import (
    encode_address,
    encode_computation,
    encode_fields,
    format_word,
)
from hackasm.errors import (
    AddressRangeError,
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
)


# =============================================================================
# Table Contents
# =============================================================================

class TestTables:
    """Test the closed mnemonic enumerations."""

    def test_computation_mnemonics(self):
        """All 28 ALU computations are present, in table order."""
        assert Computation.mnemonics() == [
            "0", "1", "-1", "D", "A", "!D", "!A", "-D", "-A",
            "D+1", "A+1", "D-1", "A-1", "D+A", "D-A", "A-D", "D&A", "D|A",
            "M", "!M", "-M", "M+1", "M-1", "D+M", "D-M", "M-D", "D&M", "D|M",
        ]

    def test_destination_mnemonics(self):
        assert Destination.mnemonics() == ["M", "D", "DM", "A", "AM", "AD", "ADM"]

    def test_jump_mnemonics(self):
        assert Jump.mnemonics() == ["JGT", "JEQ", "JGE", "JLT", "JNE", "JLE", "JMP"]

    def test_codes_are_unique(self):
        """Every table entry maps to exactly one distinct code."""
        for table in (Computation, Destination, Jump):
            codes = [member.code for member in table]
            assert len(codes) == len(set(codes))

    def test_m_variants_set_a_bit(self):
        """Computations on M differ from their A twins only in the a-bit."""
        assert Computation.M.code == Computation.A.code | 0b1000000
        assert Computation.D_PLUS_M.code == Computation.D_PLUS_A.code | 0b1000000
        assert Computation.NOT_M.code == Computation.NOT_A.code | 0b1000000

    def test_null_fields_are_zero(self):
        assert Destination.NULL.code == 0
        assert Jump.NULL.code == 0

    def test_predefined_symbols(self):
        """Pointers, registers and I/O bases have their fixed addresses."""
        assert PREDEFINED_SYMBOLS["SP"] == 0
        assert PREDEFINED_SYMBOLS["LCL"] == 1
        assert PREDEFINED_SYMBOLS["ARG"] == 2
        assert PREDEFINED_SYMBOLS["THIS"] == 3
        assert PREDEFINED_SYMBOLS["THAT"] == 4
        assert PREDEFINED_SYMBOLS["SCREEN"] == 16384
        assert PREDEFINED_SYMBOLS["KBD"] == 24576
        for i in range(16):
            assert PREDEFINED_SYMBOLS[f"R{i}"] == i
        assert len(PREDEFINED_SYMBOLS) == 23


# =============================================================================
# Mnemonic Lookup
# =============================================================================

class TestLookup:
    """Test from_mnemonic() lookups."""

    def test_lookup_known(self):
        assert Computation.from_mnemonic("D+1") is Computation.D_PLUS_ONE
        assert Destination.from_mnemonic("AM") is Destination.AM
        assert Jump.from_mnemonic("JMP") is Jump.JMP

    def test_unknown_computation(self):
        with pytest.raises(UnknownComputationError) as exc_info:
            Computation.from_mnemonic("D+D")
        assert exc_info.value.mnemonic == "D+D"
        assert "unknown computation 'D+D'" in str(exc_info.value)

    def test_unknown_destination(self):
        with pytest.raises(UnknownDestinationError):
            Destination.from_mnemonic("MD")

    def test_unknown_jump(self):
        with pytest.raises(UnknownJumpError):
            Jump.from_mnemonic("JMPX")

    def test_empty_text_is_not_a_mnemonic(self):
        """The null entries cannot be selected by writing an empty field."""
        with pytest.raises(UnknownDestinationError):
            Destination.from_mnemonic("")
        with pytest.raises(UnknownJumpError):
            Jump.from_mnemonic("")

    def test_lookup_is_case_sensitive(self):
        with pytest.raises(UnknownJumpError):
            Jump.from_mnemonic("jmp")

    def test_unknown_mnemonic_suggests_close_matches(self):
        with pytest.raises(UnknownJumpError) as exc_info:
            Jump.from_mnemonic("JPM")
        assert "JMP" in exc_info.value.similar
        assert "did you mean" in str(exc_info.value)


# =============================================================================
# Word Encoding
# =============================================================================

class TestEncoding:
    """Test address and computation word layout."""

    def test_address_words(self):
        assert format_word(encode_address(0)) == "0000000000000000"
        assert format_word(encode_address(3)) == "0000000000000011"
        assert encode_address(MAX_ADDRESS) == 0x7FFF

    def test_address_out_of_range(self):
        with pytest.raises(AddressRangeError) as exc_info:
            encode_address(MAX_ADDRESS + 1)
        assert exc_info.value.value == 32768

    def test_dest_comp(self):
        """D=D+1 -> comp 0011111, dest 010, jump 000."""
        assert format_word(encode_fields("D+1", dest="D")) == "1110011111010000"

    def test_comp_jump(self):
        """0;JMP -> comp 0101010, dest 000, jump 111."""
        assert format_word(encode_fields("0", jump="JMP")) == "1110101010000111"

    def test_dest_comp_jump(self):
        word = encode_fields("D|M", dest="ADM", jump="JLE")
        assert format_word(word) == "1111010101111110"

    def test_comp_only(self):
        assert format_word(encode_fields("M-1")) == "1111110010000000"

    def test_encode_computation_from_members(self):
        word = encode_computation(Computation.M_MINUS_ONE, Destination.AM)
        assert format_word(word) == "1111110010101000"

    def test_computation_prefix(self):
        """Bits 15-13 of every computation word are 111."""
        for comp in Computation:
            assert encode_computation(comp) >> 13 == 0b111


# =============================================================================
# Field Policy
# =============================================================================

class TestFieldPolicy:
    """Test strict and permissive handling of unknown dest/jump text."""

    def test_strict_unknown_destination(self):
        with pytest.raises(UnknownDestinationError):
            encode_fields("D", dest="X")

    def test_strict_unknown_jump(self):
        with pytest.raises(UnknownJumpError):
            encode_fields("D", jump="JXX")

    def test_permissive_defaults_to_null(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hackasm.encoder"):
            word = encode_fields("D", dest="X", jump="JXX", strict=False)
        assert format_word(word) == "1110001100000000"
        assert "unknown destination 'X'" in caplog.text
        assert "unknown jump 'JXX'" in caplog.text

    def test_permissive_still_rejects_computation(self):
        with pytest.raises(UnknownComputationError):
            encode_fields("D+D", dest="D", strict=False)

    def test_destination_checked_before_computation(self):
        """With several bad fields the destination is reported first."""
        with pytest.raises(UnknownDestinationError):
            encode_fields("D+D", dest="X")
