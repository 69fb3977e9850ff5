"""
Mano Assembler - Two-Pass Assembler for the Basic Computer
==========================================================

This package assembles symbolic source for the basic computer, a single
accumulator machine with 16-bit words and a 12-bit address field, into
binary machine words.

Main Components
---------------
- **cpu**: Instruction classes and encoding tables
- **assembler**: Parser, two-pass code generator, Assembler facade
- **cli**: The ``manoasm`` command-line tool

Quick Start
-----------
    >>> from mano_asm import Assembler
    >>> asm = Assembler()
    >>> ctx = asm.assemble_lines(["ORG 10", "LDA X", "HLT", "X DEC -1", "END"])
    >>> [w.hex for w in ctx.words]
    ['2012', '7001', 'FFFF']

Or use the command-line tool:
    $ manoasm prog.asm -o prog.obj -l prog.lst -s prog.sym
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mano_asm.assembler import (
    Assembler,
    AssemblyContext,
    Instruction,
    MachineWord,
    SymbolTable,
    assemble,
    assemble_file,
    assemble_instructions,
    first_pass,
    parse_line,
    second_pass,
)
from mano_asm.config import AssemblerConfig
from mano_asm.cpu import InstructionType, classify_opcode
from mano_asm.errors import (
    ManoError,
    AssemblerError,
    AssemblySyntaxError,
    UnknownOpcodeError,
    LiteralError,
    UndefinedSymbolError,
    DuplicateSymbolError,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "AssemblyContext",
    "Instruction",
    "MachineWord",
    "SymbolTable",
    "assemble",
    "assemble_file",
    "assemble_instructions",
    "first_pass",
    "parse_line",
    "second_pass",
    # Configuration
    "AssemblerConfig",
    # Instruction set
    "InstructionType",
    "classify_opcode",
    # Exception hierarchy
    "ManoError",
    "AssemblerError",
    "AssemblySyntaxError",
    "UnknownOpcodeError",
    "LiteralError",
    "UndefinedSymbolError",
    "DuplicateSymbolError",
]
