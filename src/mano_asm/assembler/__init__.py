"""
Basic Computer Assembler
========================

This package provides a two-pass assembler for the basic computer, a
single-accumulator machine with 16-bit words and a 12-bit address field.

Main Components
---------------
- **Assembler**: Main class that orchestrates the assembly process
- **Lexer**: Splits source text into whitespace-separated tokens
- **Parser**: Turns token lines into immutable Instruction records
- **CodeGenerator**: Runs pass 1 (addresses, symbols) and pass 2 (words)

Assembly Process
----------------
1. **Parsing**: every line becomes ``Instruction(label, opcode, operand,
   type)``; the type comes from the opcode alone.
2. **Pass 1**: assign addresses, honor ORG, stop at END, build the symbol
   table.
3. **Pass 2**: walk the same lines with an identical location counter and
   emit one 16-bit word per MRI, register-reference, IO, DEC and HEX line.

Example Usage
-------------
>>> from mano_asm.assembler import assemble
>>> ctx = assemble(["ORG 2000", "INP", "OUT", "HLT", "END"])
>>> [(hex(w.address), w.hex) for w in ctx.words]
[('0x2000', 'F800'), ('0x2001', 'F400'), ('0x2002', '7001')]
"""

from mano_asm.assembler.assembler import Assembler, assemble, assemble_file
from mano_asm.assembler.lexer import Lexer, SourceLine, Token, tokenize_line
from mano_asm.assembler.parser import (
    Instruction,
    parse_line,
    parse_lines,
    parse_source,
)
from mano_asm.assembler.codegen import (
    AssemblyContext,
    CodeGenerator,
    MachineWord,
    Symbol,
    SymbolTable,
    assemble_instructions,
    encode_instruction,
    first_pass,
    format_listing,
    format_object,
    format_symbols,
    second_pass,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "SourceLine",
    "Token",
    "tokenize_line",
    # Parser
    "Instruction",
    "parse_line",
    "parse_lines",
    "parse_source",
    # Code generator
    "AssemblyContext",
    "CodeGenerator",
    "MachineWord",
    "Symbol",
    "SymbolTable",
    "assemble_instructions",
    "encode_instruction",
    "first_pass",
    "second_pass",
    # Output formatting
    "format_listing",
    "format_object",
    "format_symbols",
]
