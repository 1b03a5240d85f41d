"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, which is the primary
interface for translating Hack assembly into machine code. It runs the
normalizer, macro expander, symbol resolver and code generator in order.

Example Usage
-------------
>>> from hackasm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
...     @i
...     M=1         // i = 1
... (LOOP)
...     M[i]=M[i]+1
...     0;JMP:LOOP
... ''')
>>> asm.get_symbols()["LOOP"]
2
>>> asm.write_hack("Prog.hack")

Or in one call:

>>> from hackasm.assembler import translate_file
>>> translate_file("Prog.asm", "Prog.hack")
"""

from pathlib import Path
from typing import Iterable, Optional
import io
import logging

from hackasm.assembler.normalizer import read_source_lines
from hackasm.assembler.macros import MacroExpander
from hackasm.assembler.symbols import SymbolTable
from hackasm.assembler.resolver import SymbolResolver
from hackasm.assembler.codegen import CodeGenerator


logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    Each assemble call builds a fresh symbol table, so one instance can
    translate several programs in turn. Results of the last successful
    call are available through get_code(), get_symbols() and get_listing().
    """

    def __init__(self) -> None:
        self._expander = MacroExpander()
        self._codegen: Optional[CodeGenerator] = None
        self._table: Optional[SymbolTable] = None
        self._source_file: Optional[Path] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_lines(self, lines: Iterable[str],
                       filename: str = "<input>") -> list[str]:
        """
        Assemble a sequence of raw source lines.

        The pipeline is:
        1. Normalize lines (strip comments and whitespace)
        2. Expand shorthand macros
        3. Pass 1: build symbol table, drop labels
        4. Pass 2: encode binary words

        Args:
            lines: Raw source lines
            filename: Name used in error messages

        Returns:
            One 16-character binary string per instruction

        Raises:
            FormatError: If a line cannot be parsed
            SymbolLookupError: If a symbol is missing in pass 2
        """
        self._codegen = None
        self._table = None

        source = read_source_lines(lines, filename)
        expanded = self._expander.expand(source)

        table = SymbolTable()
        resolved = SymbolResolver(table).resolve(expanded)

        codegen = CodeGenerator(table)
        words = codegen.generate(resolved)

        self._table = table
        self._codegen = codegen
        logger.info(f"Assembled {filename}: {len(words)} words, {len(table)} symbols")
        return words

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        Lines end only at LF, CRLF or CR. Other control characters such as
        form feeds stay inside their line and are dropped by the normalizer.
        """
        return self.assemble_lines(io.StringIO(source, newline=None), filename)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Raises:
            FormatError: If a line cannot be parsed
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._source_file = filepath
        logger.debug(f"Reading {filepath}")
        with open(filepath, errors="replace") as f:
            return self.assemble_lines(f, str(filepath))

    def translate_file(self, input_path: str | Path,
                       output_path: str | Path) -> None:
        """
        Translate an assembly file into a machine code file.

        The output file is created or overwritten only if translation
        succeeds.
        """
        self.assemble_file(input_path)
        self.write_hack(output_path)

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> list[str]:
        """Return the binary words of the last assembly."""
        return self._require_codegen().get_code()

    def get_symbols(self) -> dict[str, int]:
        """Return the symbol table of the last assembly."""
        self._require_codegen()
        return self._table.as_dict()

    def get_symbol_table(self) -> SymbolTable:
        """Return the full symbol table of the last assembly."""
        self._require_codegen()
        return self._table

    def get_listing(self) -> str:
        """Return the assembly listing of the last assembly."""
        return self._require_codegen().get_listing()

    def write_hack(self, filepath: str | Path) -> None:
        """Write the binary words, one per line."""
        self._require_codegen().write_hack(filepath)
        logger.debug(f"Wrote {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        self._require_codegen().write_listing(filepath)
        logger.debug(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the symbol table file."""
        self._require_codegen().write_symbols(filepath)
        logger.debug(f"Wrote symbols to {filepath}")

    def _require_codegen(self) -> CodeGenerator:
        if self._codegen is None:
            raise RuntimeError("no successful assembly yet")
        return self._codegen


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> list[str]:
    """
    Convenience function to assemble source code.

    Returns:
        One binary word per instruction

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> list[str]:
    """Convenience function to assemble a file."""
    return Assembler().assemble_file(filepath)


def translate_file(input_path: str | Path, output_path: str | Path) -> None:
    """Translate an assembly file into a .hack machine code file."""
    Assembler().translate_file(input_path, output_path)
