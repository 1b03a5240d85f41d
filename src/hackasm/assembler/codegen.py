"""
Hack Code Generator (Pass 2)
============================

Pass 2 turns the label-free, resolved program into 16-bit binary words,
one per line, in order.

Address-Load
------------
- ``@123`` encodes the number directly
- ``@name`` encodes the address from the symbol table

Compute
-------
``dest=comp;jump`` encodes as ``111`` + comp (7) + dest (3) + jump (3).

Output
------
Each word is a 16-character string of ``0`` and ``1``. A ``.hack`` file
holds one word per line.
"""

from pathlib import Path
from typing import Iterable
import logging

from hackasm.errors import FormatError, SymbolLookupError
from hackasm.assembler.encoding import (
    UnknownMnemonicError,
    encode_compute,
    is_decimal,
    to_word,
)
from hackasm.assembler.normalizer import SourceLine, LineKind
from hackasm.assembler.symbols import SymbolTable


logger = logging.getLogger(__name__)


class CodeGenerator:
    """
    Generates binary words from resolved lines.

    The generator only reads the symbol table; it never defines symbols.

    Usage:
        codegen = CodeGenerator(table)
        words = codegen.generate(lines)
        codegen.write_hack("Prog.hack")
    """

    def __init__(self, table: SymbolTable):
        self._table = table
        self._words: list[str] = []
        self._lines: list[SourceLine] = []

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, lines: Iterable[SourceLine]) -> list[str]:
        """
        Encode every line.

        Raises:
            FormatError: If a compute field is not a known mnemonic, or a
                         label line reaches this pass
            SymbolLookupError: If an address-load names an unknown symbol
        """
        self._words = []
        self._lines = []
        for line in lines:
            self._words.append(self.encode_line(line))
            self._lines.append(line)

        logger.debug(f"Pass 2: generated {len(self._words)} words")
        return list(self._words)

    def encode_line(self, line: SourceLine) -> str:
        """Encode a single address-load or compute line."""
        kind = line.kind
        if kind is LineKind.ADDRESS:
            return self._encode_address(line)
        if kind is LineKind.COMPUTE:
            return self._encode_compute(line)
        raise FormatError(
            f"unexpected label in pass 2: {line.text}",
            location=line.location,
            source_line=line.source,
        )

    def get_code(self) -> list[str]:
        """Return the words from the last generate() call."""
        return list(self._words)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Instruction address, word, source line number and original text
            for every instruction, followed by the symbol table.
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("Addr   Word              Line  Source")
        lines.append("-" * 60)
        for address, (word, line) in enumerate(zip(self._words, self._lines)):
            lines.append(
                f"{address:5d}  {word}  {line.location.line:4d}  {line.source.strip()}"
            )
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for sym in sorted(self._table.symbols(), key=lambda s: (s.value, s.name)):
            lines.append(f"{sym.name:20s} = {sym.value:5d}  ({sym.kind})")
        return "\n".join(lines)

    def write_hack(self, filepath: str | Path) -> None:
        """Write one word per line."""
        with open(filepath, "w") as f:
            for word in self._words:
                f.write(f"{word}\n")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        with open(filepath, "w") as f:
            f.write(self.get_listing())
            f.write("\n")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (one per line, sorted by name)
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for name in sorted(self._table):
                f.write(f"{name} {self._table[name]}\n")

    # =========================================================================
    # Encoding
    # =========================================================================

    def _encode_address(self, line: SourceLine) -> str:
        value = line.operand
        if is_decimal(value):
            return to_word(int(value))
        if value not in self._table:
            raise SymbolLookupError(
                value, location=line.location, source_line=line.source
            )
        return to_word(self._table[value])

    def _encode_compute(self, line: SourceLine) -> str:
        try:
            return encode_compute(line.text)
        except UnknownMnemonicError as e:
            raise FormatError(
                f"unknown {e.field} mnemonic '{e.mnemonic}'",
                location=line.location,
                source_line=line.source,
            ) from e
