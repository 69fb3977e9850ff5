"""
Basic Computer Instruction Set Definition
=========================================

This module defines the instruction set of the basic computer: a single
accumulator machine with 16-bit words and a 12-bit address field.

Instruction Formats
-------------------
Every instruction occupies exactly one 16-bit word.

1. **MEMORY_REFERENCE**: ``I | opcode (3) | address (12)``
   - Bit 15 selects indirect addressing
   - Opcodes 000-110
   - Example: LDA 123 -> 0010 000100100011

2. **NON_MEMORY_REFERENCE** (register reference): ``0111 | control (12)``
   - Exactly one control bit set per instruction
   - Example: CLA -> 0111 100000000000 ($7800)

3. **IO**: ``1111 | control (12)``
   - Same shape as register reference, drives device handshake lines
   - Example: INP -> 1111 100000000000 ($F800)

4. **PSEUDO**: assembler directives ORG, END, DEC, HEX. DEC and HEX emit a
   data word; ORG and END emit nothing.

The tables below are architecture constants taken from the machine's
control-bit layout. They are reproduced bit-exact and never computed.
"""

from enum import Enum

from mano_asm.errors import UnknownOpcodeError


# =============================================================================
# Instruction Classes
# =============================================================================

class InstructionType(Enum):
    """
    Basic computer instruction classes.

    The class of an instruction is a pure function of its mnemonic.
    """
    MEMORY_REFERENCE = "MRI"
    NON_MEMORY_REFERENCE = "RRI"
    IO = "IO"
    PSEUDO = "PSEUDO"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Encoding Tables
# =============================================================================

WORD_BITS = 16
ADDRESS_BITS = 12
ADDRESS_MASK = (1 << ADDRESS_BITS) - 1
WORD_MASK = (1 << WORD_BITS) - 1

# Direct 3-bit opcodes; the indirect variant sets bit 3 of the field.
MRI_OPCODES: dict[str, int] = {
    "AND": 0b000,
    "ADD": 0b001,
    "LDA": 0b010,
    "STA": 0b011,
    "BUN": 0b100,
    "BSA": 0b101,
    "ISZ": 0b110,
}

INDIRECT_BIT = 0b1000

RRI_CONSTANTS: dict[str, int] = {
    "CLA": 0x7800,
    "CLE": 0x7400,
    "CMA": 0x7200,
    "CME": 0x7100,
    "CIR": 0x7080,
    "CIL": 0x7040,
    "INC": 0x7020,
    "SPA": 0x7010,
    "SNA": 0x7008,
    "SZA": 0x7004,
    "SZE": 0x7002,
    "HLT": 0x7001,
}

IO_CONSTANTS: dict[str, int] = {
    "INP": 0xF800,
    "OUT": 0xF400,
    "SKI": 0xF200,
    "SKO": 0xF100,
    "ION": 0xF080,
    "IOF": 0xF040,
}

PSEUDO_OPS = frozenset({"ORG", "END", "DEC", "HEX"})

# Marker token that follows the operand of an indirect memory reference
INDIRECT_MARKER = "I"


# =============================================================================
# Instruction Set Reference Lists
# =============================================================================

MEMORY_REFERENCE_INSTRUCTIONS = frozenset(MRI_OPCODES)
NON_MEMORY_REFERENCE_INSTRUCTIONS = frozenset(RRI_CONSTANTS)
IO_INSTRUCTIONS = frozenset(IO_CONSTANTS)

INSTRUCTION_CLASSES: dict[str, InstructionType] = {
    **{m: InstructionType.MEMORY_REFERENCE for m in MEMORY_REFERENCE_INSTRUCTIONS},
    **{m: InstructionType.NON_MEMORY_REFERENCE for m in NON_MEMORY_REFERENCE_INSTRUCTIONS},
    **{m: InstructionType.IO for m in IO_INSTRUCTIONS},
    **{m: InstructionType.PSEUDO for m in PSEUDO_OPS},
}

MNEMONICS = frozenset(INSTRUCTION_CLASSES)


# =============================================================================
# Lookup Functions
# =============================================================================

def classify_opcode(mnemonic: str) -> InstructionType:
    """
    Return the instruction class of a mnemonic.

    Args:
        mnemonic: Instruction mnemonic (case-sensitive, e.g. "LDA")

    Returns:
        The InstructionType for the mnemonic

    Raises:
        UnknownOpcodeError: If the mnemonic is not in the instruction set
    """
    try:
        return INSTRUCTION_CLASSES[mnemonic]
    except KeyError:
        raise UnknownOpcodeError(mnemonic) from None


def is_valid_instruction(mnemonic: str) -> bool:
    """Check if a mnemonic belongs to any instruction class."""
    return mnemonic in INSTRUCTION_CLASSES


def is_memory_reference(mnemonic: str) -> bool:
    """Check if a mnemonic is a memory-reference instruction."""
    return mnemonic in MEMORY_REFERENCE_INSTRUCTIONS


def to_binary(value: int, width: int) -> str:
    """Format a non-negative value as a zero-padded binary string."""
    return format(value, f"0{width}b")


def opcode_field(mnemonic: str, indirect: bool = False) -> str:
    """
    Return the 4-bit opcode field of a memory-reference instruction.

    Direct and indirect variants differ only in the high bit:
    LDA -> "0010", indirect LDA -> "1010".

    Raises:
        UnknownOpcodeError: If the mnemonic is not a memory reference
    """
    try:
        code = MRI_OPCODES[mnemonic]
    except KeyError:
        raise UnknownOpcodeError(mnemonic) from None
    if indirect:
        code |= INDIRECT_BIT
    return to_binary(code, WORD_BITS - ADDRESS_BITS)


def non_memory_reference_field(mnemonic: str) -> str:
    """
    Return the 16-bit word of a register-reference instruction.

    Raises:
        UnknownOpcodeError: If the mnemonic is not a register reference
    """
    try:
        return to_binary(RRI_CONSTANTS[mnemonic], WORD_BITS)
    except KeyError:
        raise UnknownOpcodeError(mnemonic) from None


def io_field(mnemonic: str) -> str:
    """
    Return the 16-bit word of an input/output instruction.

    Raises:
        UnknownOpcodeError: If the mnemonic is not an IO instruction
    """
    try:
        return to_binary(IO_CONSTANTS[mnemonic], WORD_BITS)
    except KeyError:
        raise UnknownOpcodeError(mnemonic) from None
