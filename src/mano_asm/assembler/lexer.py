"""
Basic Computer Assembly Language Lexer
======================================

This module splits assembly source into whitespace-separated tokens. The
language has no operators or punctuation: every line is a sequence of at
most four words (label, mnemonic, operand, indirect marker).

Comments
--------
When tokenizing whole source texts, a comment starts at any of the
configured comment characters (default ``;`` and ``/``) and runs to the end
of the line. Lines that are empty after comment removal are skipped.

Single lines passed to ``tokenize_line`` are split on whitespace only,
without comment handling, so pre-split instruction streams stay exact.

Example
-------
>>> from mano_asm.assembler.lexer import Lexer
>>> lexer = Lexer("VALUE DEC 5   ; five", "example.asm")
>>> for line in lexer.tokenize():
...     print(list(line.tokens))
[Token('VALUE', 1:1), Token('DEC', 1:7), Token('5', 1:11)]
"""

from dataclasses import dataclass
from typing import Iterator
import re

from mano_asm.errors import SourceLocation


_WORD_RE = re.compile(r"\S+")


# =============================================================================
# Token Data Classes
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single whitespace-delimited word of source text.

    Attributes:
        text: The token text, exactly as written (case is preserved)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    text: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


@dataclass(frozen=True)
class SourceLine:
    """
    A tokenized, non-empty source line.

    Attributes:
        number: Line number in the original text (1-indexed)
        text: Original line text (without trailing newline)
        tokens: Tokens remaining after comment removal
    """
    number: int
    text: str
    tokens: tuple[Token, ...]


# =============================================================================
# Tokenizing Functions
# =============================================================================

def tokenize_line(line: str, line_number: int = 1, filename: str = "<input>") -> list[Token]:
    """
    Split one line on whitespace, keeping the column of every token.

    Args:
        line: Raw source line
        line_number: Line number used in token locations
        filename: Source filename used in token locations

    Returns:
        List of tokens (empty for a blank line)
    """
    return [
        Token(match.group(), line_number, match.start() + 1, filename)
        for match in _WORD_RE.finditer(line)
    ]


def strip_comment(line: str, comment_chars: str) -> str:
    """Return the part of a line before the first comment character."""
    for pos, char in enumerate(line):
        if char in comment_chars:
            return line[:pos]
    return line


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes basic computer assembly source text line by line.

    Usage:
        lexer = Lexer(source_text, filename)
        lines = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
        comment_chars: Characters that start a comment
    """

    def __init__(self, source: str, filename: str = "<input>", comment_chars: str = ";/"):
        self.source = source
        self.filename = filename
        self.comment_chars = comment_chars

    def tokenize(self) -> Iterator[SourceLine]:
        """
        Generate tokenized lines, skipping blank and comment-only lines.

        Yields:
            SourceLine objects in source order
        """
        for number, text in enumerate(self.source.splitlines(), start=1):
            code = strip_comment(text, self.comment_chars) if self.comment_chars else text
            tokens = tokenize_line(code, number, self.filename)
            if tokens:
                yield SourceLine(number, text, tuple(tokens))
