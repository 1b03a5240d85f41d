# =============================================================================
# test_resolver.py - Symbol Table and Pass 1 Unit Tests
# =============================================================================
# Tests for the symbol table and the first assembler pass.
#
# Test coverage includes:
#   - Predefined symbols
#   - Label addresses (labels take no code space)
#   - Variable allocation from address 16 in first-appearance order
#   - Label line removal
#   - Duplicate labels and unparseable lines
#   - Freezing the table after pass 1
# =============================================================================

import pytest

from hackasm.assembler.macros import MacroExpander
from hackasm.assembler.normalizer import read_source_lines
from hackasm.assembler.resolver import SymbolResolver
from hackasm.assembler.symbols import (
    PREDEFINED_SYMBOLS,
    SymbolKind,
    SymbolTable,
)
from hackasm.errors import (
    AssemblerError,
    DuplicateSymbolError,
    FormatError,
    SourceLocation,
)


# =============================================================================
# Helper Functions
# =============================================================================

def resolve(source: str) -> tuple[list[str], SymbolTable]:
    """Run normalization, expansion and pass 1; return texts and table."""
    lines = MacroExpander().expand(read_source_lines(source.splitlines(), "<test>"))
    table = SymbolTable()
    resolved = SymbolResolver(table).resolve(lines)
    return [line.text for line in resolved], table


# =============================================================================
# Symbol Table Tests
# =============================================================================

class TestSymbolTable:
    """Test SymbolTable directly."""

    def test_predefined_registers(self):
        table = SymbolTable()
        for n in range(16):
            assert table[f"R{n}"] == n

    def test_predefined_io(self):
        table = SymbolTable()
        assert table["SCREEN"] == 16384
        assert table["KEYBOARD"] == 24576

    def test_predefined_count(self):
        assert len(SymbolTable()) == len(PREDEFINED_SYMBOLS) == 18

    def test_tables_are_independent(self):
        first = SymbolTable()
        first.allocate_variable("x")
        assert "x" not in SymbolTable()

    def test_allocate_sequential(self):
        table = SymbolTable()
        assert table.allocate_variable("a") == 16
        assert table.allocate_variable("b") == 17
        assert table.allocate_variable("a") == 16
        assert table.allocate_variable("c") == 18

    def test_allocate_existing_symbol(self):
        table = SymbolTable()
        table.define_label("LOOP", 3)
        assert table.allocate_variable("LOOP") == 3
        assert table.allocate_variable("R5") == 5
        assert table.allocate_variable("x") == 16

    def test_duplicate_label(self):
        table = SymbolTable()
        table.define_label("LOOP", 0, SourceLocation("a.asm", 1))
        with pytest.raises(DuplicateSymbolError, match="a.asm:1"):
            table.define_label("LOOP", 4, SourceLocation("a.asm", 5))

    def test_label_shadowing_predefined(self):
        table = SymbolTable()
        with pytest.raises(DuplicateSymbolError, match="predefined"):
            table.define_label("SCREEN", 0)

    def test_frozen_rejects_new_symbols(self):
        table = SymbolTable()
        table.allocate_variable("x")
        table.freeze()
        assert table.frozen
        assert table.allocate_variable("x") == 16
        with pytest.raises(AssemblerError, match="frozen"):
            table.allocate_variable("y")
        with pytest.raises(AssemblerError, match="frozen"):
            table.define_label("END", 0)

    def test_symbols_by_kind(self):
        table = SymbolTable()
        table.define_label("END", 2)
        table.allocate_variable("i")
        assert [s.name for s in table.symbols(SymbolKind.LABEL)] == ["END"]
        assert [s.name for s in table.symbols(SymbolKind.VARIABLE)] == ["i"]
        assert table.get("END").kind is SymbolKind.LABEL
        assert table.get("nope") is None


# =============================================================================
# Label Tests
# =============================================================================

class TestLabels:
    """Labels resolve to the index of the next instruction."""

    def test_label_at_top(self):
        _, table = resolve("(LOOP)\n@LOOP")
        assert table["LOOP"] == 0

    def test_label_after_instructions(self):
        _, table = resolve("@1\nD=A\n(END)\n@END\n0;JMP")
        assert table["END"] == 2

    def test_consecutive_labels(self):
        _, table = resolve("@0\n(A)\n(B)\nD=A")
        assert table["A"] == 1
        assert table["B"] == 1

    def test_label_at_end(self):
        _, table = resolve("@0\nD=A\n(END)")
        assert table["END"] == 2

    def test_labels_count_expanded_lines(self):
        """Labels are placed after macro expansion."""
        _, table = resolve("M[5]=M[5]+1\n0;JMP:END\n(END)")
        assert table["END"] == 4

    def test_forward_reference_is_not_variable(self):
        _, table = resolve("@END\n0;JMP\n@x\n(END)\n@END")
        assert table["END"] == 3
        assert table["x"] == 16

    def test_labels_removed(self):
        texts, _ = resolve("(START)\n@1\n(MID)\nD=A\n(END)")
        assert texts == ["@1", "D=A"]


# =============================================================================
# Variable Tests
# =============================================================================

class TestVariables:
    """Variables get addresses from 16 in first-appearance order."""

    def test_first_variable_is_16(self):
        _, table = resolve("@i\nM=1")
        assert table["i"] == 16

    def test_first_appearance_order(self):
        _, table = resolve("@b\n@a\n@b\n@c")
        assert table["b"] == 16
        assert table["a"] == 17
        assert table["c"] == 18

    def test_numbers_not_allocated(self):
        _, table = resolve("@100\n@x")
        assert "100" not in table
        assert table["x"] == 16

    def test_predefined_not_reallocated(self):
        _, table = resolve("@R3\n@SCREEN\n@x")
        assert table["x"] == 16

    def test_indirect_address_allocates(self):
        _, table = resolve("M[count]=0")
        assert table["count"] == 16

    def test_table_frozen_after_resolve(self):
        _, table = resolve("@x")
        assert table.frozen


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Lines that match no instruction shape are fatal."""

    def test_unknown_compute(self):
        with pytest.raises(FormatError) as exc_info:
            resolve("@1\nD=A\nD=D*A")
        assert exc_info.value.line_index == 2
        assert exc_info.value.text == "D=D*A"

    def test_garbage_line(self):
        with pytest.raises(FormatError, match="cannot parse"):
            resolve("hello world")

    def test_empty_address(self):
        with pytest.raises(FormatError, match="empty address"):
            resolve("@")

    def test_empty_label(self):
        with pytest.raises(FormatError, match="empty label"):
            resolve("()")

    def test_numeric_label(self):
        with pytest.raises(FormatError, match="is a number"):
            resolve("(5)")

    def test_bracket_in_address(self):
        with pytest.raises(FormatError, match="invalid character"):
            resolve("@x]")

    def test_duplicate_label(self):
        with pytest.raises(DuplicateSymbolError) as exc_info:
            resolve("(LOOP)\n@0\n(LOOP)")
        assert exc_info.value.line_index == 2
        assert exc_info.value.symbol == "LOOP"
