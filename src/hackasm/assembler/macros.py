"""
Hack Shorthand Macro Expander
=============================

This module expands the two shorthand instruction forms into primitive
instructions. Expansion runs before symbol resolution because it changes
the number of instructions, and therefore the addresses of labels.

Indirect Memory Shorthand
-------------------------
``M[expr]`` names the memory word at address ``expr``. The line becomes an
address-load of ``expr`` followed by the original operation on ``M``:

    M[x]=M[x]+1     ->  @x
                        M=M+1

    M[5]=D          ->  @5
                        M=D

    D=M[count]      ->  @count
                        D=M

Labeled-Jump Shorthand
----------------------
A jump field written ``cond:label`` loads the label first:

    D;JGT:LOOP      ->  @LOOP
                        D;JGT

A line may use one shorthand form, not both.
"""

from typing import Iterable
import logging
import re

from hackasm.errors import MacroError
from hackasm.assembler.encoding import split_compute
from hackasm.assembler.normalizer import SourceLine, LineKind, ADDRESS_MARKER


logger = logging.getLogger(__name__)

INDIRECT_PATTERN = re.compile(r"M\[([^\[\]=;]+)\]")
MEMORY_REGISTER = "M"
LABEL_SEPARATOR = ":"


class MacroExpander:
    """
    Expands indirect-memory and labeled-jump shorthand into primitive lines.

    The expander is stateless; one instance can be reused across programs.

    Usage:
        expander = MacroExpander()
        primitive = expander.expand(lines)
    """

    def expand(self, lines: Iterable[SourceLine]) -> list[SourceLine]:
        """Expand every line of a program, preserving order."""
        expanded: list[SourceLine] = []
        count = 0
        for line in lines:
            count += 1
            expanded.extend(self.expand_line(line))
        logger.debug(f"Macro expansion: {count} lines -> {len(expanded)} lines")
        return expanded

    def expand_line(self, line: SourceLine) -> list[SourceLine]:
        """
        Expand a single line.

        Returns:
            One or more primitive lines. Lines without shorthand come back
            unchanged as a one-element list.

        Raises:
            MacroError: If the shorthand is malformed or both forms are used
        """
        if line.kind is not LineKind.COMPUTE:
            return [line]

        has_indirect = "[" in line.text or "]" in line.text
        _, _, jump = split_compute(line.text)
        has_labeled_jump = LABEL_SEPARATOR in jump

        if has_indirect and has_labeled_jump:
            raise MacroError(
                "indirect addressing and labeled jump cannot be combined",
                location=line.location,
                source_line=line.source,
                hint="split the line into a memory access and a separate jump",
            )
        if has_indirect:
            return self._expand_indirect(line)
        if has_labeled_jump:
            return self._expand_labeled_jump(line)
        return [line]

    # =========================================================================
    # Indirect Memory Shorthand
    # =========================================================================

    def _expand_indirect(self, line: SourceLine) -> list[SourceLine]:
        """Rewrite M[expr] into @expr followed by the operation on M."""
        addresses = INDIRECT_PATTERN.findall(line.text)
        remainder = INDIRECT_PATTERN.sub(MEMORY_REGISTER, line.text)

        if not addresses or "[" in remainder or "]" in remainder:
            raise MacroError(
                "malformed indirect address",
                location=line.location,
                source_line=line.source,
                hint="write indirect memory access as M[address]",
            )
        if len(set(addresses)) > 1:
            raise MacroError(
                f"conflicting indirect addresses: {', '.join(sorted(set(addresses)))}",
                location=line.location,
                source_line=line.source,
                hint="a single instruction can address only one memory word",
            )

        address = addresses[0]
        dest, comp, jump = split_compute(line.text)
        dest_count = len(INDIRECT_PATTERN.findall(dest))
        comp_count = len(INDIRECT_PATTERN.findall(comp))

        if (
            INDIRECT_PATTERN.search(jump)
            or (dest_count and INDIRECT_PATTERN.fullmatch(dest) is None)
            or comp_count > 1
        ):
            raise MacroError(
                "unsupported placement of indirect address",
                location=line.location,
                source_line=line.source,
                hint="use M[x]=M[x]<op>, M[x]=<comp> or <dest>=M[x]",
            )

        return [
            line.derive(f"{ADDRESS_MARKER}{address}"),
            line.derive(remainder),
        ]

    # =========================================================================
    # Labeled-Jump Shorthand
    # =========================================================================

    def _expand_labeled_jump(self, line: SourceLine) -> list[SourceLine]:
        """Rewrite dest=comp;cond:label into @label followed by the jump."""
        head, _, label = line.text.partition(LABEL_SEPARATOR)
        _, _, condition = split_compute(head)

        if not condition or not label:
            raise MacroError(
                "labeled jump needs both a condition and a label",
                location=line.location,
                source_line=line.source,
                hint="write labeled jumps as <comp>;<condition>:<label>",
            )

        return [
            line.derive(f"{ADDRESS_MARKER}{label}"),
            line.derive(head),
        ]
