"""
hackasm - Hack Assembler Command-Line Interface
===============================================

Usage Examples
--------------
Basic assembly (writes Prog.hack next to the source):
    $ hackasm Prog.asm

With output file:
    $ hackasm Prog.asm -o build/Prog.hack

Generate all output files:
    $ hackasm Prog.asm -o Prog.hack -l Prog.lst -s Prog.sym

Tolerate unknown destination/jump mnemonics:
    $ hackasm --permissive Prog.asm
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hackasm import __version__
from hackasm.assembler import Assembler
from hackasm.cli.errors import handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


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
    help="Output .hack file (default: input.hack)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file (labels and variables)",
)
@click.option(
    "--all-symbols",
    is_flag=True,
    help="Include predefined symbols in the symbol file",
)
@click.option(
    "--strict/--permissive",
    default=True,
    help="Fail on unknown destination/jump mnemonics (default), or encode "
         "them as 000 with a warning. Unknown computations always fail.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    all_symbols: bool,
    strict: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    Each instruction becomes one line of 16 binary digits in the output.

    \b
    Examples:
        hackasm Max.asm               # Outputs Max.hack
        hackasm Max.asm -o out.hack   # Specify output file
        hackasm -s Max.sym Max.asm    # Also write the symbol table
    """
    setup_logging(verbose)

    output_file = output if output is not None else input_file.with_suffix(".hack")

    asm = Assembler(verbose=verbose, strict=strict)

    if verbose:
        click.echo(f"Mnemonic policy: {'strict' if strict else 'permissive'}")

    try:
        asm.assemble_file(input_file)

        asm.write_hack(output_file)

        if listing:
            asm.write_listing(listing)

        if symbols:
            asm.write_symbols(symbols, include_predefined=all_symbols)

        if verbose:
            table = asm.get_symbol_table()
            click.echo(f"Assembly complete: {len(asm.get_words())} words")
            click.echo(f"Defined {len(table.labels())} labels, "
                       f"{len(table.variables())} variables")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
