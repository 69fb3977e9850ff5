"""
Basic Computer Assembly Language Parser
=======================================

This module converts tokenized source lines into immutable ``Instruction``
records that both assembler passes consume.

Line Formats
------------
| Tokens | Form                         | Example          |
|--------|------------------------------|------------------|
| 1      | OPCODE                       | HLT              |
| 2      | OPCODE OPERAND               | LDA VALUE        |
| 3      | LABEL OPCODE OPERAND         | LOOP ADD VALUE   |
| 3      | MRI OPERAND I                | LDA PTR I        |
| 4      | LABEL MRI OPERAND I          | GET LDA PTR I    |

The trailing ``I`` marks indirect addressing and is only recognized after
a memory-reference instruction. Any other token count is a syntax error.

The instruction class is derived from the opcode alone; whether the
operand suits that class is checked during code generation, not here.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union
import logging

from mano_asm.errors import (
    AssemblySyntaxError,
    SourceLocation,
    UnknownOpcodeError,
)
from mano_asm.assembler.lexer import Lexer, Token, tokenize_line
from mano_asm.cpu import (
    INDIRECT_MARKER,
    InstructionType,
    classify_opcode,
    is_memory_reference,
)


logger = logging.getLogger(__name__)

LineInput = Union[str, Sequence[str], Sequence[Token]]


# =============================================================================
# Instruction Data Class
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    One parsed source line.

    Instructions are created once by the parser and never modified; both
    passes read the same records.

    Attributes:
        label: Label defined on this line, if any
        opcode: Mnemonic (case-sensitive)
        operand: Operand text, if any
        type: Instruction class; must match the opcode's class
        indirect: True when the line ends with the indirect marker
        location: Where the line starts (not part of equality)
        source_line: Original line text (not part of equality)
    """
    label: Optional[str]
    opcode: str
    operand: Optional[str]
    type: InstructionType
    indirect: bool = False
    location: Optional[SourceLocation] = field(default=None, compare=False)
    source_line: Optional[str] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        expected = classify_opcode(self.opcode)
        if self.type != expected:
            raise ValueError(
                f"{self.opcode} is a {expected.value} instruction, not {self.type.value}"
            )

    def __str__(self) -> str:
        parts = [self.label or "", self.opcode]
        if self.operand is not None:
            parts.append(self.operand)
        if self.indirect:
            parts.append(INDIRECT_MARKER)
        return " ".join(parts).strip()


# =============================================================================
# Parsing Functions
# =============================================================================

def _as_tokens(line: LineInput, line_number: int, filename: str) -> list[Token]:
    """Normalize a raw line or pre-split word list to tokens."""
    if isinstance(line, str):
        return tokenize_line(line, line_number, filename)

    tokens = []
    for word in line:
        if isinstance(word, Token):
            tokens.append(word)
        else:
            # Pre-split input has no column information
            tokens.append(Token(str(word), line_number, 0, filename))
    return tokens


def parse_line(
    line: LineInput,
    line_number: int = 1,
    filename: str = "<input>",
    source_line: Optional[str] = None,
) -> Instruction:
    """
    Parse one source line into an Instruction.

    Args:
        line: Raw line text, a list of words, or a list of tokens
        line_number: Line number for diagnostics
        filename: Source filename for diagnostics
        source_line: Original text for diagnostics (defaults to the line)

    Returns:
        The parsed Instruction

    Raises:
        AssemblySyntaxError: If the token count is not a valid line form
        UnknownOpcodeError: If the opcode is not in the instruction set
    """
    tokens = _as_tokens(line, line_number, filename)
    if source_line is None:
        source_line = line if isinstance(line, str) else " ".join(t.text for t in tokens)
    words = [t.text for t in tokens]
    count = len(tokens)

    label = None
    operand = None
    indirect = False

    if count == 4 and is_memory_reference(words[1]) and words[3] == INDIRECT_MARKER:
        label, op_token, operand, indirect = words[0], tokens[1], words[2], True
    elif count == 3 and is_memory_reference(words[0]) and words[2] == INDIRECT_MARKER:
        op_token, operand, indirect = tokens[0], words[1], True
    elif count == 3:
        label, op_token, operand = words[0], tokens[1], words[2]
    elif count == 2:
        op_token, operand = tokens[0], words[1]
    elif count == 1:
        op_token = tokens[0]
    else:
        location = tokens[0].location if tokens else SourceLocation(filename, line_number, 0)
        raise AssemblySyntaxError(
            f"unexpected format: expected 1 to 3 fields, found {count}",
            location=location,
            hint="lines have the form [LABEL] OPCODE [OPERAND], "
                 "with an optional trailing 'I' after memory-reference operands",
            source_line=source_line,
        )

    try:
        instruction_type = classify_opcode(op_token.text)
    except UnknownOpcodeError:
        raise UnknownOpcodeError(
            op_token.text,
            location=op_token.location,
            source_line=source_line,
        ) from None

    return Instruction(
        label=label,
        opcode=op_token.text,
        operand=operand,
        type=instruction_type,
        indirect=indirect,
        location=tokens[0].location,
        source_line=source_line,
    )


def parse_lines(lines: Sequence[LineInput], filename: str = "<input>") -> list[Instruction]:
    """
    Parse an ordered sequence of lines.

    Every line must hold an instruction; blank lines are a syntax error
    here. Use ``parse_source`` for free-form text with comments.

    Raises:
        AssemblySyntaxError, UnknownOpcodeError: On the first bad line
    """
    instructions = [
        parse_line(line, line_number=number, filename=filename)
        for number, line in enumerate(lines, start=1)
    ]
    logger.debug(f"Parsed {len(instructions)} instructions from {filename}")
    return instructions


def parse_source(source: str, filename: str = "<input>", comment_chars: str = ";/") -> list[Instruction]:
    """
    Parse source text, skipping blank lines and comments.

    Line numbers in diagnostics refer to the original text.

    Raises:
        AssemblySyntaxError, UnknownOpcodeError: On the first bad line
    """
    lexer = Lexer(source, filename, comment_chars=comment_chars)
    instructions = [
        parse_line(list(line.tokens), line.number, filename, source_line=line.text)
        for line in lexer.tokenize()
    ]
    logger.debug(f"Parsed {len(instructions)} instructions from {filename}")
    return instructions
