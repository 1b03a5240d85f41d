"""
Hack Assembler
==============

This package translates Hack assembly language into 16-bit binary
machine code, one ``0``/``1`` word per instruction.

Main Components
---------------
- **Assembler**: Main class that orchestrates the translation
- **normalizer**: Strips comments and whitespace, classifies lines
- **MacroExpander**: Expands ``M[x]`` and ``cond:label`` shorthand
- **SymbolResolver**: Pass 1, builds the symbol table and drops labels
- **CodeGenerator**: Pass 2, encodes binary words
- **encoding**: Compute, destination and jump bit patterns

Assembly Process
----------------
1. **Normalization**: comments and whitespace are removed
2. **Macro expansion**: shorthand becomes primitive instructions. This
   must happen first because it changes instruction counts.
3. **Pass 1**: labels get the index of the next instruction, new
   variables get addresses from 16
4. **Pass 2**: each instruction becomes one 16-bit word

Example Usage
-------------
>>> from hackasm.assembler import assemble
>>> assemble("@2\\nD=D+1")
['0000000000000010', '1110011111010000']
"""

from hackasm.assembler.assembler import (
    Assembler,
    assemble,
    assemble_file,
    translate_file,
)
from hackasm.assembler.normalizer import (
    LineKind,
    SourceLine,
    classify_line,
    normalize_line,
    read_source_lines,
)
from hackasm.assembler.macros import MacroExpander
from hackasm.assembler.symbols import (
    Symbol,
    SymbolKind,
    SymbolTable,
    PREDEFINED_SYMBOLS,
    VARIABLE_BASE,
)
from hackasm.assembler.resolver import SymbolResolver
from hackasm.assembler.codegen import CodeGenerator
from hackasm.assembler.encoding import (
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    encode_compute,
    split_compute,
    to_word,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    "translate_file",
    # Normalizer
    "LineKind",
    "SourceLine",
    "classify_line",
    "normalize_line",
    "read_source_lines",
    # Macros
    "MacroExpander",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    "PREDEFINED_SYMBOLS",
    "VARIABLE_BASE",
    # Passes
    "SymbolResolver",
    "CodeGenerator",
    # Encoding
    "COMP_TABLE",
    "DEST_TABLE",
    "JUMP_TABLE",
    "encode_compute",
    "split_compute",
    "to_word",
]
