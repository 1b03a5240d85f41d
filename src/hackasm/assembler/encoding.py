"""
Hack Instruction Encoding Tables
================================

This module defines the bit patterns for the compute instruction fields
and the helpers that turn instruction text into 16-bit binary words.

Instruction Formats
-------------------
1. **Address-load** (``@value``):

   ``0vvvvvvvvvvvvvvv`` - the value as a 16-bit unsigned number,
   most significant bit first.

2. **Compute** (``dest=comp;jump``):

   ``111a cccc ccdd djjj``

   - ``a cccccc``: 7-bit compute field (the ``a`` bit selects M over A)
   - ``ddd``: destination field (A, D, M bits)
   - ``jjj``: jump field (less-than, equal, greater-than bits)

   The destination and jump parts are optional; a missing part encodes
   as ``000``.

The tables are read-only mappings built once at import time.
"""

import re
from types import MappingProxyType
from typing import Mapping


WORD_SIZE = 16
WORD_MASK = (1 << WORD_SIZE) - 1

# Leading bits of every compute instruction
COMPUTE_PREFIX = "111"

DECIMAL_PATTERN = re.compile(r"[0-9]+")


# =============================================================================
# Compute Field (7 bits: a c1..c6)
# =============================================================================

COMP_TABLE: Mapping[str, str] = MappingProxyType({
    # a=0: ALU operates on A
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # a=1: ALU operates on M
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
})


# =============================================================================
# Destination Field (3 bits: A D M)
# =============================================================================

DEST_TABLE: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
})


# =============================================================================
# Jump Field (3 bits: lt eq gt)
# =============================================================================

JUMP_TABLE: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})


# =============================================================================
# Helpers
# =============================================================================

def is_decimal(text: str) -> bool:
    """Return True if text is a non-negative decimal numeral."""
    return DECIMAL_PATTERN.fullmatch(text) is not None


def to_word(value: int) -> str:
    """
    Encode an integer as a 16-character binary string, MSB first.

    Values wider than 16 bits are truncated to their low 16 bits.
    """
    return format(value & WORD_MASK, f"0{WORD_SIZE}b")


def split_compute(text: str) -> tuple[str, str, str]:
    """
    Split a compute instruction into (dest, comp, jump).

    The destination is the text before the first ``=`` and the jump is the
    text after the first ``;`` that follows it. Missing parts are empty.

    >>> split_compute("D=D+1")
    ('D', 'D+1', '')
    >>> split_compute("0;JMP")
    ('', '0', 'JMP')
    """
    dest, sep, rest = text.partition("=")
    if not sep:
        dest, rest = "", text
    comp, _, jump = rest.partition(";")
    return dest, comp, jump


class UnknownMnemonicError(KeyError):
    """A compute field does not match any entry in its table."""

    def __init__(self, field: str, mnemonic: str):
        self.field = field
        self.mnemonic = mnemonic
        super().__init__(f"unknown {field} mnemonic '{mnemonic}'")


def lookup_fields(dest: str, comp: str, jump: str) -> tuple[str, str, str]:
    """
    Look up the bit patterns for the three compute fields.

    Jump mnemonics are matched case-insensitively.

    Returns:
        (comp_bits, dest_bits, jump_bits)

    Raises:
        UnknownMnemonicError: naming the field whose mnemonic is unknown
    """
    if comp not in COMP_TABLE:
        raise UnknownMnemonicError("compute", comp)
    if dest not in DEST_TABLE:
        raise UnknownMnemonicError("destination", dest)
    jump_key = jump.upper()
    if jump_key not in JUMP_TABLE:
        raise UnknownMnemonicError("jump", jump)
    return COMP_TABLE[comp], DEST_TABLE[dest], JUMP_TABLE[jump_key]


def is_compute(text: str) -> bool:
    """Return True if text is a compute instruction made of known mnemonics."""
    try:
        lookup_fields(*split_compute(text))
    except UnknownMnemonicError:
        return False
    return True


def encode_compute(text: str) -> str:
    """
    Encode a compute instruction as a 16-bit binary string.

    >>> encode_compute("D=D+1")
    '1110011111010000'

    Raises:
        UnknownMnemonicError: if a field does not match a known mnemonic
    """
    comp_bits, dest_bits, jump_bits = lookup_fields(*split_compute(text))
    return COMPUTE_PREFIX + comp_bits + dest_bits + jump_bits
