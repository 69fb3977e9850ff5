"""
Mano Assembler CPU Package
==========================

Architecture definitions of the basic computer shared by the parser and the
code generator: instruction classes, encoding tables and lookup helpers.

Usage:
    from mano_asm.cpu import (
        InstructionType,
        classify_opcode,
        opcode_field,
    )
"""

from mano_asm.cpu.basic_computer import (
    # Core types
    InstructionType,
    # Architecture constants
    WORD_BITS,
    ADDRESS_BITS,
    ADDRESS_MASK,
    WORD_MASK,
    INDIRECT_MARKER,
    # Encoding tables
    MRI_OPCODES,
    RRI_CONSTANTS,
    IO_CONSTANTS,
    PSEUDO_OPS,
    # Instruction set reference lists
    MNEMONICS,
    MEMORY_REFERENCE_INSTRUCTIONS,
    NON_MEMORY_REFERENCE_INSTRUCTIONS,
    IO_INSTRUCTIONS,
    # Lookup functions
    classify_opcode,
    is_valid_instruction,
    is_memory_reference,
    to_binary,
    opcode_field,
    non_memory_reference_field,
    io_field,
)

__all__ = [
    "InstructionType",
    "WORD_BITS",
    "ADDRESS_BITS",
    "ADDRESS_MASK",
    "WORD_MASK",
    "INDIRECT_MARKER",
    "MRI_OPCODES",
    "RRI_CONSTANTS",
    "IO_CONSTANTS",
    "PSEUDO_OPS",
    "MNEMONICS",
    "MEMORY_REFERENCE_INSTRUCTIONS",
    "NON_MEMORY_REFERENCE_INSTRUCTIONS",
    "IO_INSTRUCTIONS",
    "classify_opcode",
    "is_valid_instruction",
    "is_memory_reference",
    "to_binary",
    "opcode_field",
    "non_memory_reference_field",
    "io_field",
]
