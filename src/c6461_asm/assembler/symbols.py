"""
Symbol Table and Location Counter
=================================

State shared by the two assembly passes. Both are explicit objects owned
by the code generator and handed to each pass; nothing here is global.

- SymbolTable: label name -> address. Filled during pass 1, read during
  pass 2. Names are case-sensitive and a later definition of the same
  name replaces the earlier one.
- LocationCounter: address of the next word. Each pass starts it at 0.
"""

from typing import Iterator, Optional
import logging

logger = logging.getLogger(__name__)


class SymbolTable:
    """
    Mapping from label name to resolved address.

    Usage:
        symbols = SymbolTable()
        symbols.define("LOOP", 6)
        symbols.resolve("LOOP")     # 6
        symbols.resolve("missing")  # None
    """

    def __init__(self) -> None:
        self._symbols: dict[str, int] = {}

    def define(self, name: str, address: int) -> None:
        """Bind name to address, replacing any earlier binding."""
        previous = self._symbols.get(name)
        if previous is not None and previous != address:
            logger.debug(f"Label '{name}' redefined: {previous} -> {address}")
        self._symbols[name] = address

    def resolve(self, name: str) -> Optional[int]:
        """Return the address bound to name, or None if it is not defined."""
        return self._symbols.get(name)

    def clear(self) -> None:
        self._symbols.clear()

    def as_dict(self) -> dict[str, int]:
        """Return a copy of the table."""
        return dict(self._symbols)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolTable({self._symbols!r})"


class LocationCounter:
    """
    Address of the next word to be emitted.

    Moved only by LOC (set_absolute) and by word-allocating constructs
    (advance). Blank lines, comments, labels and the end marker leave it
    alone.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start

    def get(self) -> int:
        return self._value

    def set_absolute(self, value: int) -> None:
        """Set the counter from an origin directive."""
        self._value = value

    def advance(self) -> None:
        """Step past one word."""
        self._value += 1

    def reset(self) -> None:
        """Return to address 0 at the start of a pass."""
        self._value = 0

    def __repr__(self) -> str:
        return f"LocationCounter({self._value})"
