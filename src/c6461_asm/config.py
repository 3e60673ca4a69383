"""
C6461 Assembler - Configuration
===============================

Default file names and text encoding for an assembly run. Configuration
can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the c6461asm CLI on top of these)

The default file names are the ones the classroom toolchain has always
used: ``source.txt`` in, ``listing.txt`` and ``load.txt`` out.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os


@dataclass
class AssemblerConfig:
    """
    Configuration for one assembler run.

    Attributes:
        source_file: Assembly source to read (default: source.txt)
        listing_file: Listing output path (default: listing.txt)
        load_file: Load file output path (default: load.txt)
        symbols_file: Optional symbol table output path (default: none)
        encoding: Text encoding for every file (default: utf-8)
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PATHS
    # ═══════════════════════════════════════════════════════════════════════════

    source_file: Path = Path("source.txt")
    listing_file: Path = Path("listing.txt")
    load_file: Path = Path("load.txt")
    symbols_file: Optional[Path] = None

    # ═══════════════════════════════════════════════════════════════════════════
    # TEXT
    # ═══════════════════════════════════════════════════════════════════════════

    encoding: str = "utf-8"

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            C6461_SOURCE: Source file path
            C6461_LISTING: Listing file path
            C6461_LOAD: Load file path
            C6461_SYMBOLS: Symbol file path
            C6461_ENCODING: Text encoding

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if source := os.environ.get("C6461_SOURCE"):
            config.source_file = Path(source)

        if listing := os.environ.get("C6461_LISTING"):
            config.listing_file = Path(listing)

        if load := os.environ.get("C6461_LOAD"):
            config.load_file = Path(load)

        if symbols := os.environ.get("C6461_SYMBOLS"):
            config.symbols_file = Path(symbols)

        if encoding := os.environ.get("C6461_ENCODING"):
            config.encoding = encoding

        return config
