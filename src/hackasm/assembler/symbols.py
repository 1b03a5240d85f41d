"""
Hack Symbol Table
=================

The symbol table maps symbol names to addresses. A fresh table is built
for every translation and goes through two phases:

1. **Pass 1** (mutable): labels and variables are added
2. **Pass 2** (frozen): lookups only; any attempt to add a symbol raises

Predefined Symbols
------------------
| Symbol       | Address |
|--------------|---------|
| R0 .. R15    | 0 .. 15 |
| SCREEN       | 16384   |
| KEYBOARD     | 24576   |

Variables are allocated from address 16 upward, one word each, in the
order they first appear.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hackasm.errors import AssemblerError, DuplicateSymbolError, SourceLocation


VARIABLE_BASE = 16
REGISTER_COUNT = 16
SCREEN_BASE = 16384
KEYBOARD_BASE = 24576

PREDEFINED_SYMBOLS: dict[str, int] = {
    **{f"R{n}": n for n in range(REGISTER_COUNT)},
    "SCREEN": SCREEN_BASE,
    "KEYBOARD": KEYBOARD_BASE,
}


class SymbolKind(Enum):
    """How a symbol got its address."""
    PREDEFINED = auto()     # Registers and memory-mapped I/O
    LABEL = auto()          # (name) declaration
    VARIABLE = auto()       # First @name reference

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name
        value: Resolved address
        kind: How the address was assigned
        location: Where the symbol was defined (None for predefined symbols)
    """
    name: str
    value: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Symbol name to address mapping for one translation.

    Usage:
        table = SymbolTable()
        table.define_label("LOOP", 4, location)
        table.allocate_variable("i")    # -> 16
        table.freeze()
        table["LOOP"]                   # -> 4
    """

    def __init__(self) -> None:
        self._symbols: dict[str, Symbol] = {}
        self._next_variable = VARIABLE_BASE
        self._frozen = False
        for name, value in PREDEFINED_SYMBOLS.items():
            self._symbols[name] = Symbol(name, value, SymbolKind.PREDEFINED)

    # =========================================================================
    # Mapping Interface
    # =========================================================================

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __getitem__(self, name: str) -> int:
        return self._symbols[name].value

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def get(self, name: str) -> Optional[Symbol]:
        """Return the full entry for a symbol, or None."""
        return self._symbols.get(name)

    def symbols(self, kind: Optional[SymbolKind] = None) -> list[Symbol]:
        """Return entries in definition order, optionally filtered by kind."""
        return [s for s in self._symbols.values() if kind is None or s.kind is kind]

    def as_dict(self) -> dict[str, int]:
        """Return a plain name -> address copy of the table."""
        return {name: sym.value for name, sym in self._symbols.items()}

    # =========================================================================
    # Pass 1 Mutation
    # =========================================================================

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the table read-only. Called once pass 1 completes."""
        self._frozen = True

    def define_label(self, name: str, address: int,
                     location: Optional[SourceLocation] = None,
                     source_line: Optional[str] = None) -> None:
        """
        Record a label address.

        Raises:
            DuplicateSymbolError: If the name is already defined
        """
        self._check_mutable(name)
        existing = self._symbols.get(name)
        if existing is not None:
            raise DuplicateSymbolError(
                name,
                location=location,
                original_location=existing.location,
                source_line=source_line,
            )
        self._symbols[name] = Symbol(name, address, SymbolKind.LABEL, location)

    def allocate_variable(self, name: str,
                          location: Optional[SourceLocation] = None) -> int:
        """
        Return the address of a variable, allocating one on first use.

        Existing symbols of any kind are returned unchanged.
        """
        existing = self._symbols.get(name)
        if existing is not None:
            return existing.value
        self._check_mutable(name)
        address = self._next_variable
        self._next_variable += 1
        self._symbols[name] = Symbol(name, address, SymbolKind.VARIABLE, location)
        return address

    def _check_mutable(self, name: str) -> None:
        if self._frozen:
            raise AssemblerError(
                f"cannot define '{name}': symbol table is frozen after pass 1"
            )
