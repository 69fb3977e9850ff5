# =============================================================================
# test_opcodes.py - Instruction Set Table Tests
# =============================================================================
# Tests for instruction classification and the encoding tables of the basic
# computer. The expected words come from the machine's control-bit layout.
# =============================================================================

import pytest

from mano_asm.cpu import (
    InstructionType,
    MNEMONICS,
    classify_opcode,
    io_field,
    is_memory_reference,
    is_valid_instruction,
    non_memory_reference_field,
    opcode_field,
    to_binary,
)
from mano_asm.errors import UnknownOpcodeError


# =============================================================================
# Classification Tests
# =============================================================================

class TestClassification:
    """Test mapping of mnemonics to instruction classes."""

    @pytest.mark.parametrize("mnemonic", ["AND", "ADD", "LDA", "STA", "BUN", "BSA", "ISZ"])
    def test_memory_reference(self, mnemonic):
        """Memory-reference mnemonics classify as MEMORY_REFERENCE."""
        assert classify_opcode(mnemonic) == InstructionType.MEMORY_REFERENCE

    @pytest.mark.parametrize("mnemonic", [
        "CLA", "CLE", "CMA", "CME", "CIR", "CIL",
        "INC", "SPA", "SNA", "SZA", "SZE", "HLT",
    ])
    def test_register_reference(self, mnemonic):
        """Register-reference mnemonics classify as NON_MEMORY_REFERENCE."""
        assert classify_opcode(mnemonic) == InstructionType.NON_MEMORY_REFERENCE

    @pytest.mark.parametrize("mnemonic", ["INP", "OUT", "SKI", "SKO", "ION", "IOF"])
    def test_io(self, mnemonic):
        """IO mnemonics classify as IO."""
        assert classify_opcode(mnemonic) == InstructionType.IO

    @pytest.mark.parametrize("mnemonic", ["ORG", "END", "DEC", "HEX"])
    def test_pseudo(self, mnemonic):
        """Directives classify as PSEUDO."""
        assert classify_opcode(mnemonic) == InstructionType.PSEUDO

    def test_instruction_set_size(self):
        """The instruction set has 29 mnemonics."""
        assert len(MNEMONICS) == 29

    def test_unknown_opcode(self):
        """Mnemonics outside the set are rejected."""
        with pytest.raises(UnknownOpcodeError) as exc_info:
            classify_opcode("JMP")
        assert exc_info.value.mnemonic == "JMP"

    def test_case_sensitive(self):
        """Lowercase mnemonics are unknown, with a hint."""
        with pytest.raises(UnknownOpcodeError) as exc_info:
            classify_opcode("lda")
        assert "LDA" in str(exc_info.value)

    def test_predicates(self):
        """Helper predicates agree with classification."""
        assert is_valid_instruction("HLT")
        assert not is_valid_instruction("NOP")
        assert is_memory_reference("BSA")
        assert not is_memory_reference("HLT")


# =============================================================================
# Encoding Table Tests
# =============================================================================

class TestOpcodeField:
    """Test the 4-bit memory-reference opcode field."""

    @pytest.mark.parametrize("mnemonic,direct,indirect", [
        ("AND", "0000", "1000"),
        ("ADD", "0001", "1001"),
        ("LDA", "0010", "1010"),
        ("STA", "0011", "1011"),
        ("BUN", "0100", "1100"),
        ("BSA", "0101", "1101"),
        ("ISZ", "0110", "1110"),
    ])
    def test_direct_and_indirect(self, mnemonic, direct, indirect):
        """Direct and indirect variants differ only in the high bit."""
        assert opcode_field(mnemonic) == direct
        assert opcode_field(mnemonic, indirect=True) == indirect

    def test_not_memory_reference(self):
        """Only memory-reference mnemonics have an opcode field."""
        with pytest.raises(UnknownOpcodeError):
            opcode_field("HLT")


class TestRegisterReferenceField:
    """Test the register-reference constants."""

    @pytest.mark.parametrize("mnemonic,word", [
        ("CLA", "0111100000000000"),
        ("CLE", "0111010000000000"),
        ("CMA", "0111001000000000"),
        ("CME", "0111000100000000"),
        ("CIR", "0111000010000000"),
        ("CIL", "0111000001000000"),
        ("INC", "0111000000100000"),
        ("SPA", "0111000000010000"),
        ("SNA", "0111000000001000"),
        ("SZA", "0111000000000100"),
        ("SZE", "0111000000000010"),
        ("HLT", "0111000000000001"),
    ])
    def test_constants(self, mnemonic, word):
        assert non_memory_reference_field(mnemonic) == word

    def test_io_mnemonic_rejected(self):
        """IO mnemonics are not in the register-reference table."""
        with pytest.raises(UnknownOpcodeError):
            non_memory_reference_field("INP")


class TestIOField:
    """Test the input/output constants."""

    @pytest.mark.parametrize("mnemonic,word", [
        ("INP", "1111100000000000"),
        ("OUT", "1111010000000000"),
        ("SKI", "1111001000000000"),
        ("SKO", "1111000100000000"),
        ("ION", "1111000010000000"),
        ("IOF", "1111000001000000"),
    ])
    def test_constants(self, mnemonic, word):
        assert io_field(mnemonic) == word

    def test_register_mnemonic_rejected(self):
        with pytest.raises(UnknownOpcodeError):
            io_field("CLA")


def test_to_binary_pads():
    """Binary fields are zero-padded to their width."""
    assert to_binary(5, 12) == "000000000101"
    assert to_binary(0, 16) == "0" * 16
