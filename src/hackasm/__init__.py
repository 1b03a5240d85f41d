"""
hackasm - Assembler for the Hack 16-bit Computer
================================================

This package translates Hack assembly language (.asm) into Hack machine
code (.hack): one 16-character binary string per instruction.

Main Components
---------------
- **assembler**: the two-pass translation pipeline
    Normalizer -> Macro Expander -> Symbol Resolver -> Code Generator

- **cli**: the ``hackasm`` command-line tool

Quick Start
-----------
Translate a file:
    >>> from hackasm import translate_file
    >>> translate_file("Max.asm", "Max.hack")

Assemble a string:
    >>> from hackasm import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_string("@2\\nD=A")
    ['0000000000000010', '1110110000010000']

Or use the command-line tool:
    $ hackasm Max.asm -o Max.hack

Shorthand
---------
Besides the primitive instructions, two shorthand forms are accepted:

- ``M[x]=M[x]+1`` for ``@x`` followed by ``M=M+1``
- ``0;JMP:LOOP`` for ``@LOOP`` followed by ``0;JMP``
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.assembler import Assembler, assemble, assemble_file, translate_file
from hackasm.errors import (
    HackError,
    AssemblerError,
    FormatError,
    MacroError,
    DuplicateSymbolError,
    SymbolLookupError,
    SourceLocation,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "translate_file",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "FormatError",
    "MacroError",
    "DuplicateSymbolError",
    "SymbolLookupError",
    "SourceLocation",
]
