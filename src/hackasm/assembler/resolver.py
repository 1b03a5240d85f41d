"""
Hack Symbol Resolver (Pass 1)
=============================

Pass 1 builds the symbol table from the macro-expanded program and strips
label declarations from it. It runs two linear scans:

Scan 1 (Labels)
---------------
- Count instructions (every line that is not a label)
- Record each label as the count of instructions before it
- Labels take no space, so ``(A)`` ``(B)`` ``@0`` gives A = B = 0

Scan 2 (Variables)
------------------
- Validate the shape of every line
- Allocate addresses from 16 for symbols first seen in ``@name``
- Drop label lines from the output

All labels must be known before variables are allocated, otherwise a
forward reference like ``@END`` would be mistaken for a variable.
"""

from typing import Iterable
import logging

from hackasm.errors import FormatError
from hackasm.assembler.encoding import is_decimal, is_compute
from hackasm.assembler.normalizer import SourceLine, LineKind
from hackasm.assembler.symbols import SymbolTable, SymbolKind


logger = logging.getLogger(__name__)

# Characters that never belong in a symbol name
RESERVED_SYMBOL_CHARS = frozenset("()[]")


class SymbolResolver:
    """
    First pass of the assembler.

    The resolver owns the symbol table while it runs and freezes it on
    completion, after which the table is handed to the code generator.

    Usage:
        table = SymbolTable()
        lines = SymbolResolver(table).resolve(expanded_lines)
    """

    def __init__(self, table: SymbolTable):
        self._table = table

    @property
    def table(self) -> SymbolTable:
        return self._table

    def resolve(self, lines: Iterable[SourceLine]) -> list[SourceLine]:
        """
        Populate the symbol table and return the label-free program.

        Raises:
            FormatError: If a line is not a label, address-load or
                         compute instruction
            DuplicateSymbolError: If a label is defined twice
        """
        lines = list(lines)
        self._collect_labels(lines)
        resolved = self._collect_variables(lines)
        self._table.freeze()

        logger.debug(
            f"Pass 1: {len(self._table.symbols(SymbolKind.LABEL))} labels, "
            f"{len(self._table.symbols(SymbolKind.VARIABLE))} variables, "
            f"{len(resolved)} instructions"
        )
        return resolved

    # =========================================================================
    # Scan 1: Labels
    # =========================================================================

    def _collect_labels(self, lines: list[SourceLine]) -> None:
        instruction_count = 0
        for line in lines:
            if line.kind is LineKind.LABEL:
                name = line.operand
                self._check_symbol_name(name, line, "label")
                if is_decimal(name):
                    raise FormatError(
                        f"label name '{name}' is a number",
                        location=line.location,
                        source_line=line.source,
                        hint="label names must start with a non-digit",
                    )
                self._table.define_label(
                    name, instruction_count, line.location, line.source
                )
            else:
                instruction_count += 1

    # =========================================================================
    # Scan 2: Variables
    # =========================================================================

    def _collect_variables(self, lines: list[SourceLine]) -> list[SourceLine]:
        resolved: list[SourceLine] = []
        for line in lines:
            kind = line.kind
            if kind is LineKind.LABEL:
                continue
            if kind is LineKind.ADDRESS:
                value = line.operand
                self._check_symbol_name(value, line, "address")
                if not is_decimal(value):
                    self._table.allocate_variable(value, line.location)
            elif not is_compute(line.text):
                raise FormatError(
                    f"cannot parse line: {line.text}",
                    location=line.location,
                    source_line=line.source,
                    hint="expected (label), @value or dest=comp;jump",
                )
            resolved.append(line)
        return resolved

    @staticmethod
    def _check_symbol_name(name: str, line: SourceLine, what: str) -> None:
        if not name:
            raise FormatError(
                f"empty {what}",
                location=line.location,
                source_line=line.source,
            )
        if RESERVED_SYMBOL_CHARS.intersection(name):
            raise FormatError(
                f"invalid character in {what} '{name}'",
                location=line.location,
                source_line=line.source,
            )
