"""
Hack Symbol Table
=================

Maps symbolic names to RAM/ROM addresses for one assembly run.

A table starts out seeded with the predefined architecture symbols. Pass 1
binds labels to instruction addresses; pass 2 allocates variables on first
reference, handing out consecutive RAM slots from 16 upward.

The variable counter belongs to the table instance. Two tables never share
allocation state, so independent runs produce identical addresses.

Example
-------
>>> table = SymbolTable()
>>> table.bind("LOOP", 4)
>>> table.allocate_variable("i")
16
>>> table.allocate_variable("sum")
17
>>> table.allocate_variable("i")
16
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hackasm.errors import DuplicateLabelError, SourceLocation
from hackasm.opcodes import PREDEFINED_SYMBOLS, VARIABLE_BASE

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """How a symbol acquired its address."""
    PREDEFINED = auto()  # Architecture-reserved name
    LABEL = auto()       # (NAME) declaration, bound in pass 1
    VARIABLE = auto()    # @name with no label, allocated in pass 2

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name (case-sensitive)
        address: Bound address
        kind: Predefined, label or variable
        location: Where the symbol was declared or first referenced
    """
    name: str
    address: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Symbol table for a single assembly run.

    Bound addresses are never changed and variable slots are never reused.
    """

    def __init__(self):
        self._symbols: dict[str, Symbol] = {}
        self._next_variable = VARIABLE_BASE
        self.seed()

    def seed(self) -> None:
        """Bind the predefined architecture symbols (SP..THAT, R0-R15, SCREEN, KBD)."""
        for name, address in PREDEFINED_SYMBOLS.items():
            self._symbols[name] = Symbol(name, address, SymbolKind.PREDEFINED)

    # =========================================================================
    # Lookup
    # =========================================================================

    def contains(self, name: str) -> bool:
        return name in self._symbols

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def get(self, name: str) -> int:
        """
        Get the address bound to a name.

        Raises:
            KeyError: If the name is not bound
        """
        return self._symbols[name].address

    def lookup(self, name: str) -> Optional[Symbol]:
        """Get the full entry for a name, or None when unbound."""
        return self._symbols.get(name)

    @property
    def next_variable_address(self) -> int:
        """Address the next new variable will receive."""
        return self._next_variable

    # =========================================================================
    # Binding
    # =========================================================================

    def bind(self, name: str, address: int,
             location: Optional[SourceLocation] = None,
             source_line: Optional[str] = None) -> None:
        """
        Bind a label to an instruction address.

        Args:
            name: Label name
            address: Instruction address (pass-1 counter value)
            location: Declaration location, for error reporting
            source_line: Declaration text, for error reporting

        Raises:
            DuplicateLabelError: If the name is already bound
        """
        existing = self._symbols.get(name)
        if existing is not None:
            raise DuplicateLabelError(
                name,
                location=location,
                original_location=existing.location,
                source_line=source_line,
            )

        self._symbols[name] = Symbol(name, address, SymbolKind.LABEL, location)
        logger.debug(f"Label '{name}' bound to {address}")

    def allocate_variable(self, name: str,
                          location: Optional[SourceLocation] = None) -> int:
        """
        Resolve a name referenced by an address instruction.

        Bound names (predefined, labels, earlier variables) return their
        address. Unbound names get the next variable slot.

        Returns:
            The address of the name
        """
        existing = self._symbols.get(name)
        if existing is not None:
            return existing.address

        address = self._next_variable
        self._symbols[name] = Symbol(name, address, SymbolKind.VARIABLE, location)
        self._next_variable += 1
        logger.debug(f"Variable '{name}' allocated at {address}")
        return address

    # =========================================================================
    # Reporting
    # =========================================================================

    def symbols(self, kind: Optional[SymbolKind] = None) -> list[Symbol]:
        """All entries in binding order, optionally filtered by kind."""
        return [s for s in self._symbols.values() if kind is None or s.kind == kind]

    def labels(self) -> dict[str, int]:
        return {s.name: s.address for s in self.symbols(SymbolKind.LABEL)}

    def variables(self) -> dict[str, int]:
        return {s.name: s.address for s in self.symbols(SymbolKind.VARIABLE)}

    def as_dict(self) -> dict[str, int]:
        """Name to address mapping for every bound symbol."""
        return {name: s.address for name, s in self._symbols.items()}

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())
