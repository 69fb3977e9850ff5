"""
Basic Computer Code Generator
=============================

This module turns parsed instructions into 16-bit machine words. It
implements the classic two-pass process as a pipeline of functions over an
immutable ``AssemblyContext``:

    instructions -> first_pass -> (symbol table) -> second_pass -> words

Pass 1 (Address Assignment)
---------------------------
- Walk instructions with a location counter starting at 0
- ORG sets the counter (a label on the ORG line binds to the new origin)
- Other labels bind to the counter before the instruction's own effect
- END stops the pass; every other instruction advances the counter by 1

Pass 2 (Code Generation)
------------------------
- Walk the same instructions with a fresh counter, advanced exactly as in
  pass 1 so that both passes assign identical addresses
- DEC/HEX emit data words, ORG emits nothing, END stops the pass
- Memory-reference operands resolve through the completed symbol table

Word Layout
-----------
```
Memory reference:   I ooo aaaaaaaaaaaa   (opcode field 4 bits, address 12 bits)
Register reference: 0111 cccccccccccc    (fixed constant)
Input/output:       1111 cccccccccccc    (fixed constant)
Data (DEC/HEX):     dddddddddddddddd     (16-bit value)
```

Addresses wider than 12 bits are masked to the address field and reported
as warnings. Unresolved operands encode address 0 with a warning unless
strict symbol resolution is configured.
A word or label beyond $FFFF is an error in both passes.
"""

from dataclasses import dataclass, field, replace
from difflib import get_close_matches
from typing import Iterator, Optional, Sequence
import logging
import re

from mano_asm.config import AssemblerConfig
from mano_asm.errors import (
    AssemblerError,
    AssemblySyntaxError,
    DuplicateSymbolError,
    ErrorCollector,
    LiteralError,
    SourceLocation,
    UndefinedSymbolError,
)
from mano_asm.assembler.parser import Instruction
from mano_asm.cpu import (
    ADDRESS_BITS,
    ADDRESS_MASK,
    WORD_BITS,
    WORD_MASK,
    InstructionType,
    io_field,
    non_memory_reference_field,
    opcode_field,
    to_binary,
)


logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")
_DEC_RE = re.compile(r"[+-]?[0-9]+")

# DEC accepts signed and unsigned 16-bit values
DEC_MIN = -(1 << (WORD_BITS - 1))
DEC_MAX = WORD_MASK


# =============================================================================
# Symbol Table
# =============================================================================

@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Label name (case-sensitive)
        value: Resolved address
        location: Where the label was defined
    """
    name: str
    value: int
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Mapping from label to resolved address.

    The table is filled by pass 1 and frozen when pass 1 completes; any
    later attempt to define a symbol is an error, so pass 2 can only read.
    """

    def __init__(self):
        self._symbols: dict[str, Symbol] = {}
        self._frozen = False

    def define(
        self,
        name: str,
        address: int,
        location: Optional[SourceLocation] = None,
        allow_redefinition: bool = False,
        source_line: Optional[str] = None,
    ) -> Optional[Symbol]:
        """
        Bind a label to an address.

        Args:
            name: Label name
            address: Address to bind
            location: Definition location for diagnostics
            allow_redefinition: Re-bind an existing label instead of failing
            source_line: Source text for diagnostics

        Returns:
            The previous Symbol when an existing label was re-bound, else None

        Raises:
            DuplicateSymbolError: If the label exists and redefinition is off
            AssemblerError: If the table is frozen
        """
        if self._frozen:
            raise AssemblerError(
                f"cannot define '{name}': symbol table is read-only after pass 1",
                location=location,
            )

        previous = self._symbols.get(name)
        if previous is not None and not allow_redefinition:
            raise DuplicateSymbolError(
                name,
                location=location,
                original_location=previous.location,
                source_line=source_line,
            )

        self._symbols[name] = Symbol(name, address, location)
        return previous

    def lookup(self, name: str) -> Optional[int]:
        """Return the address bound to a label, or None if undefined."""
        symbol = self._symbols.get(name)
        return symbol.value if symbol is not None else None

    def similar(self, name: str, limit: int = 3) -> list[str]:
        """Return defined labels that look like the given name."""
        return get_close_matches(name, list(self._symbols), n=limit)

    def freeze(self) -> None:
        """Make the table read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def as_dict(self) -> dict[str, int]:
        """Return a plain dictionary of label names to addresses."""
        return {name: sym.value for name, sym in self._symbols.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SymbolTable):
            return self.as_dict() == other.as_dict()
        if isinstance(other, dict):
            return self.as_dict() == other
        return NotImplemented

    def __repr__(self) -> str:
        entries = ", ".join(f"{name}=${value:04X}" for name, value in self.as_dict().items())
        return f"SymbolTable({entries})"


# =============================================================================
# Output Records
# =============================================================================

@dataclass(frozen=True)
class MachineWord:
    """
    One emitted word.

    Attributes:
        address: Location counter value the word was emitted at
        binary: 16 characters of '0'/'1'
        instruction: The instruction that produced the word (not part of
            equality)
    """
    address: int
    binary: str
    instruction: Optional[Instruction] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if len(self.binary) != WORD_BITS or set(self.binary) - {"0", "1"}:
            raise ValueError(f"machine word must be {WORD_BITS} binary digits, got {self.binary!r}")

    @property
    def value(self) -> int:
        """Word value as an integer."""
        return int(self.binary, 2)

    @property
    def hex(self) -> str:
        """Word value as four hex digits."""
        return f"{self.value:04X}"


@dataclass(frozen=True)
class AssemblyContext:
    """
    State carried through the assembly pipeline.

    Each pass takes a context and returns a new one; nothing is mutated in
    place, so contexts can be reused and compared freely.

    Attributes:
        instructions: Parsed instructions in source order
        symbols: Symbol table (complete and frozen after pass 1; not hashed)
        words: Emitted machine words (filled by pass 2)
        pass1_trace: Address assigned to each instruction processed by pass 1
        pass2_trace: Address assigned to each instruction processed by pass 2
        warnings: Non-fatal diagnostics from both passes
    """
    instructions: tuple[Instruction, ...]
    symbols: SymbolTable = field(default_factory=SymbolTable, hash=False)
    words: tuple[MachineWord, ...] = ()
    pass1_trace: tuple[int, ...] = ()
    pass2_trace: tuple[int, ...] = ()
    warnings: tuple[str, ...] = ()

    @classmethod
    def from_instructions(cls, instructions: Sequence[Instruction]) -> "AssemblyContext":
        """Create a fresh context for a new assembly run."""
        return cls(instructions=tuple(instructions))


# =============================================================================
# Literal Parsing
# =============================================================================

def _require_operand(inst: Instruction) -> str:
    if inst.operand is None:
        raise AssemblySyntaxError(
            f"{inst.opcode} requires an operand",
            location=inst.location,
            source_line=inst.source_line,
        )
    return inst.operand


def parse_hex_literal(inst: Instruction) -> int:
    """
    Parse the base-16 operand of an ORG or HEX line.

    Raises:
        AssemblySyntaxError: If the operand is missing
        LiteralError: If the operand is not hex or exceeds 16 bits
    """
    text = _require_operand(inst)
    if not _HEX_RE.fullmatch(text):
        raise LiteralError(
            inst.opcode, text, "not a hexadecimal number",
            location=inst.location, source_line=inst.source_line,
        )
    value = int(text, 16)
    if value > WORD_MASK:
        raise LiteralError(
            inst.opcode, text, f"value exceeds ${WORD_MASK:04X}",
            location=inst.location, source_line=inst.source_line,
        )
    return value


def parse_dec_literal(inst: Instruction) -> int:
    """
    Parse the base-10 operand of a DEC line.

    Negative values down to -32768 are accepted; values up to 65535 are
    accepted as unsigned.

    Raises:
        AssemblySyntaxError: If the operand is missing
        LiteralError: If the operand is not decimal or out of range
    """
    text = _require_operand(inst)
    if not _DEC_RE.fullmatch(text):
        raise LiteralError(
            inst.opcode, text, "not a decimal number",
            location=inst.location, source_line=inst.source_line,
        )
    value = int(text, 10)
    if not DEC_MIN <= value <= DEC_MAX:
        raise LiteralError(
            inst.opcode, text, f"value outside {DEC_MIN}..{DEC_MAX}",
            location=inst.location, source_line=inst.source_line,
        )
    return value


def encode_data_word(value: int) -> str:
    """Encode a data value as a 16-bit field (two's complement if negative)."""
    return to_binary(value & WORD_MASK, WORD_BITS)


# =============================================================================
# Pass 1: Address Assignment
# =============================================================================

def _check_counter(location_counter: int, inst: Instruction) -> None:
    """
    Reject a line whose address lies beyond the 16-bit address space.

    An unlabeled END occupies no address and may sit just past the last word.
    """
    if location_counter <= WORD_MASK:
        return
    if inst.opcode == "END" and inst.label is None:
        return
    raise AssemblerError(
        f"location counter overflow: ${location_counter:X} exceeds ${WORD_MASK:04X}",
        location=inst.location,
        source_line=inst.source_line,
    )


def first_pass(context: AssemblyContext, config: Optional[AssemblerConfig] = None) -> AssemblyContext:
    """
    Assign addresses and build the symbol table.

    Args:
        context: Context holding the parsed instructions
        config: Assembler configuration (defaults apply if None)

    Returns:
        New context with a frozen symbol table and the pass 1 trace

    Raises:
        DuplicateSymbolError: On a repeated label (unless redefinition is allowed)
        AssemblySyntaxError, LiteralError: On a missing or malformed ORG operand
    """
    config = config or AssemblerConfig()
    symbols = SymbolTable()
    collector = ErrorCollector()
    trace: list[int] = []
    location_counter = 0

    for inst in context.instructions:
        if inst.opcode == "ORG":
            location_counter = parse_hex_literal(inst)
        _check_counter(location_counter, inst)

        if inst.label is not None:
            previous = symbols.define(
                inst.label,
                location_counter,
                location=inst.location,
                allow_redefinition=config.allow_redefinition,
                source_line=inst.source_line,
            )
            if previous is not None:
                collector.add_warning(
                    f"label '{inst.label}' redefined: ${previous.value:04X} -> ${location_counter:04X}",
                    inst.location,
                )
            logger.debug(f"Defined {inst.label} = ${location_counter:04X}")

        trace.append(location_counter)

        if inst.opcode == "END":
            break
        if inst.opcode != "ORG":
            location_counter += 1

    symbols.freeze()
    logger.debug(f"Pass 1 complete: {len(symbols)} symbols")

    return replace(
        context,
        symbols=symbols,
        pass1_trace=tuple(trace),
        warnings=context.warnings + tuple(collector.warnings),
    )


# =============================================================================
# Pass 2: Code Generation
# =============================================================================

def _resolve_address(
    inst: Instruction,
    symbols: SymbolTable,
    config: AssemblerConfig,
    collector: ErrorCollector,
) -> int:
    """Resolve a memory-reference operand to an address."""
    if inst.operand is None:
        if config.strict_symbols:
            raise AssemblySyntaxError(
                f"{inst.opcode} requires an address operand",
                location=inst.location,
                source_line=inst.source_line,
            )
        collector.add_warning(f"{inst.opcode} has no operand, using address 0", inst.location)
        return 0

    address = symbols.lookup(inst.operand)
    if address is not None:
        return address

    if config.strict_symbols:
        raise UndefinedSymbolError(
            inst.operand,
            location=inst.location,
            source_line=inst.source_line,
            similar_symbols=symbols.similar(inst.operand),
        )
    collector.add_warning(f"undefined symbol '{inst.operand}', using address 0", inst.location)
    return 0


def encode_instruction(
    inst: Instruction,
    symbols: SymbolTable,
    config: Optional[AssemblerConfig] = None,
    collector: Optional[ErrorCollector] = None,
) -> str:
    """
    Encode one word-emitting instruction as 16 binary digits.

    ORG and END emit no word and are rejected here.

    Raises:
        AssemblerError: For ORG/END, or any literal/symbol error
    """
    config = config or AssemblerConfig()
    collector = collector if collector is not None else ErrorCollector()

    if inst.type == InstructionType.PSEUDO:
        if inst.opcode == "DEC":
            return encode_data_word(parse_dec_literal(inst))
        if inst.opcode == "HEX":
            return encode_data_word(parse_hex_literal(inst))
        raise AssemblerError(
            f"{inst.opcode} does not emit a word",
            location=inst.location,
            source_line=inst.source_line,
        )

    if inst.type == InstructionType.MEMORY_REFERENCE:
        address = _resolve_address(inst, symbols, config, collector)
        if address > ADDRESS_MASK:
            collector.add_warning(
                f"address ${address:04X} of '{inst.operand}' truncated to "
                f"{ADDRESS_BITS} bits (${address & ADDRESS_MASK:03X})",
                inst.location,
            )
        return opcode_field(inst.opcode, inst.indirect) + to_binary(address & ADDRESS_MASK, ADDRESS_BITS)

    if inst.operand is not None:
        collector.add_warning(f"{inst.opcode} takes no operand, ignoring '{inst.operand}'", inst.location)

    if inst.type == InstructionType.NON_MEMORY_REFERENCE:
        return non_memory_reference_field(inst.opcode)
    return io_field(inst.opcode)


def second_pass(context: AssemblyContext, config: Optional[AssemblerConfig] = None) -> AssemblyContext:
    """
    Emit machine words using the symbol table from pass 1.

    Args:
        context: Context returned by first_pass
        config: Assembler configuration (defaults apply if None)

    Returns:
        New context with the emitted words and the pass 2 trace

    Raises:
        AssemblerError: If pass 1 has not completed, or on any encoding error
    """
    if not context.symbols.frozen:
        raise AssemblerError("pass 2 requires a completed pass 1 symbol table")

    config = config or AssemblerConfig()
    collector = ErrorCollector()
    words: list[MachineWord] = []
    trace: list[int] = []
    location_counter = 0

    for inst in context.instructions:
        if inst.opcode == "ORG":
            location_counter = parse_hex_literal(inst)
            trace.append(location_counter)
            continue

        _check_counter(location_counter, inst)
        trace.append(location_counter)
        if inst.opcode == "END":
            break

        binary = encode_instruction(inst, context.symbols, config, collector)
        words.append(MachineWord(location_counter, binary, inst))
        location_counter += 1

    logger.debug(f"Pass 2 complete: {len(words)} words, {len(collector.warnings)} warnings")

    return replace(
        context,
        words=tuple(words),
        pass2_trace=tuple(trace),
        warnings=context.warnings + tuple(collector.warnings),
    )


def assemble_instructions(
    instructions: Sequence[Instruction],
    config: Optional[AssemblerConfig] = None,
) -> AssemblyContext:
    """Run both passes over parsed instructions."""
    context = AssemblyContext.from_instructions(instructions)
    context = first_pass(context, config)
    return second_pass(context, config)


# =============================================================================
# Output Formatting
# =============================================================================

def format_listing(context: AssemblyContext) -> str:
    """
    Format an assembly listing.

    One row per emitted word (location counter in decimal, address, binary
    word, hex word, source), followed by the symbol table.
    """
    lines = [f"{'LC':>6}  {'ADDR':6}  {'BINARY':16}  {'HEX':4}  SOURCE"]
    for word in context.words:
        source = str(word.instruction) if word.instruction is not None else ""
        lines.append(
            f"{word.address:>6}  0x{word.address:04X}  {word.binary}  {word.hex}  {source}"
        )
    lines.append("")
    lines.append("Symbol table:")
    for name, value in sorted(context.symbols.as_dict().items()):
        lines.append(f"{name:20s} = ${value:04X}")
    return "\n".join(lines) + "\n"


def format_symbols(context: AssemblyContext) -> str:
    """Format the symbol table as 'NAME $XXXX' lines, sorted by name."""
    lines = ["# Symbol table", "# Generated by manoasm"]
    for name, value in sorted(context.symbols.as_dict().items()):
        lines.append(f"{name} ${value:04X}")
    return "\n".join(lines) + "\n"


def format_object(context: AssemblyContext) -> str:
    """Format emitted words as 'XXXX BBBBBBBBBBBBBBBB' lines in emission order."""
    return "".join(f"{word.address:04X} {word.binary}\n" for word in context.words)


class CodeGenerator:
    """
    Runs both passes with a fixed configuration.

    Usage:
        codegen = CodeGenerator(AssemblerConfig(strict_symbols=True))
        context = codegen.generate(instructions)
        print(format_listing(context))
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or AssemblerConfig()

    def generate(self, instructions: Sequence[Instruction]) -> AssemblyContext:
        """Generate machine words for parsed instructions."""
        return assemble_instructions(instructions, self.config)
