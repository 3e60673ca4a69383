"""
c6461asm - C6461 Assembler Command-Line Interface
=================================================

This module implements the command-line interface for the C6461
assembler.

Usage Examples
--------------
Classic run (source.txt -> listing.txt + load.txt):
    $ c6461asm

Explicit files:
    $ c6461asm prog.asm -l prog.lst -o prog.load

With a symbol file:
    $ c6461asm prog.asm -s prog.sym

Verbose mode:
    $ c6461asm -v prog.asm

Default file names can also be set through C6461_SOURCE, C6461_LISTING,
C6461_LOAD and C6461_SYMBOLS.
"""

from pathlib import Path
from typing import Optional
import logging
import sys

import click

from c6461_asm import __version__
from c6461_asm.assembler import Assembler
from c6461_asm.cli.errors import ExitCode, handle_cli_exception
from c6461_asm.config import AssemblerConfig


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Listing file (default: listing.txt)",
)
@click.option(
    "-o", "--load",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Load file for the simulator (default: load.txt)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="c6461asm")
def main(
    input_file: Optional[Path],
    listing: Optional[Path],
    load: Optional[Path],
    symbols: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble C6461 source into a listing and a load file.

    INPUT_FILE is the assembly source (default: source.txt).

    \b
    Examples:
        c6461asm                       # source.txt -> listing.txt, load.txt
        c6461asm prog.asm -o out.txt   # Specify load file
        c6461asm prog.asm -s prog.sym  # Also write the symbol table
    """
    setup_logging(verbose)

    config = AssemblerConfig.from_env()
    if input_file is not None:
        config.source_file = input_file
    if listing is not None:
        config.listing_file = listing
    if load is not None:
        config.load_file = load
    if symbols is not None:
        config.symbols_file = symbols

    asm = Assembler(config)

    try:
        if verbose:
            click.echo(f"Assembling {config.source_file}...")

        asm.assemble_file(config.source_file, config.listing_file, config.load_file)

        if config.symbols_file:
            asm.write_symbols(config.symbols_file)
            if verbose:
                click.echo(f"Wrote symbols to {config.symbols_file}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")

    if asm.has_errors() or asm.get_warnings():
        click.echo(asm.get_error_report(), err=True)

    if asm.has_errors():
        sys.exit(ExitCode.BUILD_ERROR)

    if verbose:
        words = asm.get_words()
        click.echo(f"Wrote listing to {config.listing_file}")
        click.echo(f"Wrote {len(words)} words to {config.load_file}")
        click.echo(f"Defined {len(asm.get_symbols())} symbols")

    click.echo("Assembly completed successfully.")


if __name__ == "__main__":
    main()
