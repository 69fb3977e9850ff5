"""
manoasm - Basic Computer Assembler Command-Line Interface
=========================================================

Usage Examples
--------------
Basic assembly (writes prog.obj):
    $ manoasm prog.asm

Generate all output files:
    $ manoasm prog.asm -o prog.obj -l prog.lst -s prog.sym

Print the words instead of writing an object file:
    $ manoasm --print prog.asm

Fail on undefined symbols:
    $ manoasm --strict-symbols prog.asm
"""

from pathlib import Path
from typing import Optional
import logging

import click

from mano_asm import __version__
from mano_asm.assembler import Assembler
from mano_asm.config import AssemblerConfig
from mano_asm.cli.errors import handle_cli_exception


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output object file (default: input.obj)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-p", "--print", "print_words",
    is_flag=True,
    help="Print the emitted words to stdout instead of writing an object file",
)
@click.option(
    "--strict-symbols/--lenient-symbols",
    default=None,
    help="Fail on undefined symbols instead of encoding address 0. "
         "Default: lenient, or MANO_ASM_STRICT_SYMBOLS.",
)
@click.option(
    "--allow-redefinition/--no-allow-redefinition",
    default=None,
    help="Let a repeated label re-bind to its later address (with a warning). "
         "Default: off, or MANO_ASM_ALLOW_REDEFINITION.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="manoasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    print_words: bool,
    strict_symbols: Optional[bool],
    allow_redefinition: Optional[bool],
    verbose: bool,
) -> None:
    """
    Assemble basic computer source code.

    INPUT_FILE is the assembly source file to assemble. Each line has the
    form [LABEL] OPCODE [OPERAND] [I]; ';' and '/' start comments.

    \b
    Examples:
        manoasm prog.asm              # Outputs prog.obj
        manoasm prog.asm -o out.obj   # Specify output file
        manoasm -p prog.asm           # Print words to stdout
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = AssemblerConfig.from_env().with_overrides(
        strict_symbols=strict_symbols,
        allow_redefinition=allow_redefinition,
    )
    asm = Assembler(config, verbose=verbose)

    try:
        output_file = output if output is not None else input_file.with_suffix(".obj")
        targets = [listing, symbols] + ([] if print_words else [output_file])
        for target in targets:
            if target is not None and target.resolve() == input_file.resolve():
                raise click.BadParameter(f"{target} would overwrite the input file")

        if verbose:
            click.echo(f"Assembling {input_file}...")

        context = asm.assemble_file(input_file)

        for warning in context.warnings:
            click.echo(warning, err=True)

        if print_words:
            for word in context.words:
                click.echo(f"0x{word.address:04X}  {word.binary}  {word.hex}")
        else:
            asm.write_object(output_file)
            if verbose:
                click.echo(f"Wrote {len(context.words)} words to {output_file}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            click.echo(f"Assembly complete: {len(context.words)} words")
            click.echo(f"Defined {len(context.symbols)} symbols")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
