"""
Basic Computer Assembler - Main Interface
=========================================

This module provides the Assembler class, the primary interface for
assembling basic computer source code. It coordinates the parser and the
two code generation passes, and writes listing, symbol and object files.

Example Usage
-------------
>>> from mano_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_lines([
...     "START ORG 100",
...     "LDA VALUE",
...     "HLT",
...     "VALUE DEC 5",
...     "END",
... ])
>>> asm.get_symbols()
{'START': 256, 'VALUE': 258}
>>> asm.write_object("prog.obj")

Command-Line Usage
------------------
    $ manoasm prog.asm -o prog.obj -l prog.lst -s prog.sym
"""

from pathlib import Path
from typing import Optional, Sequence
import logging

from mano_asm.config import AssemblerConfig
from mano_asm.errors import AssemblerError
from mano_asm.assembler.parser import Instruction, LineInput, parse_lines, parse_source
from mano_asm.assembler.codegen import (
    AssemblyContext,
    CodeGenerator,
    MachineWord,
    format_listing,
    format_object,
    format_symbols,
)


logger = logging.getLogger(__name__)


class Assembler:
    """
    Main basic computer assembler class.

    Each assemble_* call is an independent run: the previous result is
    replaced, nothing carries over between runs.

    Attributes:
        config: Assembler configuration
        verbose: If True, log progress messages at INFO level
    """

    def __init__(self, config: Optional[AssemblerConfig] = None, verbose: bool = False):
        """
        Initialize the assembler.

        Args:
            config: Assembler configuration (defaults if None)
            verbose: Enable progress messages
        """
        self.config = config or AssemblerConfig()
        self._verbose = verbose
        self._codegen = CodeGenerator(self.config)
        self._context: Optional[AssemblyContext] = None

    def _log(self, message: str) -> None:
        if self._verbose:
            logger.info(message)
        else:
            logger.debug(message)

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_instructions(self, instructions: Sequence[Instruction]) -> AssemblyContext:
        """
        Assemble already-parsed instructions.

        Returns:
            The resulting AssemblyContext

        Raises:
            AssemblerError: If assembly fails
        """
        self._context = None
        context = self._codegen.generate(instructions)
        self._context = context
        self._log(f"Generated {len(context.words)} words, {len(context.symbols)} symbols")
        return context

    def assemble_lines(self, lines: Sequence[LineInput], filename: str = "<input>") -> AssemblyContext:
        """
        Assemble an ordered list of lines (strings or word lists).

        Every entry must be an instruction line; no comment handling.

        Raises:
            AssemblerError: If assembly fails
        """
        self._context = None
        instructions = parse_lines(lines, filename)
        self._log(f"Parsed {len(instructions)} lines")
        return self.assemble_instructions(instructions)

    def assemble_string(self, source: str, filename: str = "<input>") -> AssemblyContext:
        """
        Assemble source text, skipping blank lines and comments.

        Raises:
            AssemblerError: If assembly fails
        """
        self._context = None
        instructions = parse_source(source, filename, comment_chars=self.config.comment_chars)
        self._log(f"Parsed {len(instructions)} statements")
        return self.assemble_instructions(instructions)

    def assemble_file(self, filepath: str | Path) -> AssemblyContext:
        """
        Assemble source code from a file.

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._log(f"Assembling {filepath}...")
        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Results
    # =========================================================================

    @property
    def context(self) -> AssemblyContext:
        """Result of the last successful run."""
        if self._context is None:
            raise AssemblerError("no assembly result available")
        return self._context

    def get_words(self) -> list[MachineWord]:
        """Return the emitted machine words in emission order."""
        return list(self.context.words)

    def get_symbols(self) -> dict[str, int]:
        """Return the symbol table as a dictionary."""
        return self.context.symbols.as_dict()

    def get_warnings(self) -> list[str]:
        """Return the non-fatal diagnostics of the last run."""
        return list(self.context.warnings)

    def has_warnings(self) -> bool:
        return bool(self._context and self._context.warnings)

    def get_listing(self) -> str:
        """Return the assembly listing as a string."""
        return format_listing(self.context)

    # =========================================================================
    # Output Methods
    # =========================================================================

    def write_object(self, filepath: str | Path) -> None:
        """Write one 'ADDR BINARY' line per emitted word."""
        Path(filepath).write_text(format_object(self.context))
        self._log(f"Wrote {len(self.context.words)} words to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing."""
        Path(filepath).write_text(self.get_listing())
        self._log(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the symbol table, one 'NAME $XXXX' line per symbol."""
        Path(filepath).write_text(format_symbols(self.context))
        self._log(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(lines: Sequence[LineInput], config: Optional[AssemblerConfig] = None) -> AssemblyContext:
    """
    Convenience function to assemble a list of lines.

    Returns:
        AssemblyContext with words and symbols

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_lines(lines)


def assemble_file(filepath: str | Path, config: Optional[AssemblerConfig] = None) -> AssemblyContext:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_file(filepath)
