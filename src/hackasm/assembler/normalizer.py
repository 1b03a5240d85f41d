"""
Hack Assembly Line Normalizer
=============================

This module turns raw source lines into normalized instruction lines.

Normalization
-------------
- Everything from the first ``//`` to the end of the line is a comment
- Whitespace and control characters are removed everywhere, so
  ``D = D + 1`` and ``D=D+1`` are the same instruction
- Only printable ASCII (``!`` through ``~``) is kept

Line Kinds
----------
After normalization every non-empty line is one of:

| Kind     | Shape          | Example      |
|----------|----------------|--------------|
| LABEL    | ``(name)``     | ``(LOOP)``   |
| ADDRESS  | ``@value``     | ``@i``       |
| COMPUTE  | anything else  | ``D=M;JGT``  |

Classification never fails. Whether a COMPUTE line actually names known
mnemonics is checked later, by the symbol resolver.

Example
-------
>>> from hackasm.assembler.normalizer import normalize_line
>>> normalize_line("  D = M   // load i")
'D=M'
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator
import logging

from hackasm.errors import SourceLocation


logger = logging.getLogger(__name__)

COMMENT_MARKER = "//"
ADDRESS_MARKER = "@"
LABEL_OPEN = "("
LABEL_CLOSE = ")"


# =============================================================================
# Line Kind Enumeration
# =============================================================================

class LineKind(Enum):
    """Kinds of normalized source lines."""
    LABEL = auto()      # (name) - marks the address of the next instruction
    ADDRESS = auto()    # @value - loads a number or symbol into A
    COMPUTE = auto()    # dest=comp;jump - ALU operation


def classify_line(text: str) -> LineKind:
    """Classify a normalized, non-empty line by its shape."""
    if text.startswith(LABEL_OPEN) and text.endswith(LABEL_CLOSE):
        return LineKind.LABEL
    if text.startswith(ADDRESS_MARKER):
        return LineKind.ADDRESS
    return LineKind.COMPUTE


# =============================================================================
# Source Line
# =============================================================================

@dataclass(frozen=True)
class SourceLine:
    """
    A normalized instruction line.

    Lines created by macro expansion share the location and original text
    of the source line they were expanded from, so errors always point at
    what the user wrote.

    Attributes:
        text: Normalized instruction text
        location: Where the line came from
        source: Original source text, before normalization
    """
    text: str
    location: SourceLocation
    source: str

    @property
    def kind(self) -> LineKind:
        return classify_line(self.text)

    @property
    def operand(self) -> str:
        """The value of an address-load, or the name of a label."""
        if self.kind is LineKind.ADDRESS:
            return self.text[len(ADDRESS_MARKER):]
        if self.kind is LineKind.LABEL:
            return self.text[len(LABEL_OPEN):-len(LABEL_CLOSE)]
        return ""

    def derive(self, text: str) -> "SourceLine":
        """Return a new line with the same origin and different text."""
        return SourceLine(text=text, location=self.location, source=self.source)


# =============================================================================
# Normalization
# =============================================================================

def normalize_line(raw: str) -> str:
    """
    Strip comments, whitespace and non-printable characters from a line.

    Returns an empty string for blank and comment-only lines.
    """
    code = raw.split(COMMENT_MARKER, 1)[0]
    return "".join(c for c in code if " " < c <= "~")


def read_source_lines(lines: Iterable[str],
                      filename: str = "<input>") -> Iterator[SourceLine]:
    """
    Normalize raw lines, skipping those that end up empty.

    Args:
        lines: Raw source lines (with or without line terminators)
        filename: Name used in source locations

    Yields:
        SourceLine for every line holding an instruction or label
    """
    count = 0
    for number, raw in enumerate(lines, start=1):
        text = normalize_line(raw)
        if not text:
            continue
        count += 1
        yield SourceLine(
            text=text,
            location=SourceLocation(filename, number),
            source=raw.rstrip("\r\n"),
        )
    logger.debug(f"Normalized {count} instruction lines from {filename}")
