# =============================================================================
# test_codegen.py - Code Generator (Pass 2) Unit Tests
# =============================================================================
# Tests for address-load and compute instruction encoding.
# =============================================================================

import pytest

from hackasm.assembler.codegen import CodeGenerator
from hackasm.assembler.normalizer import SourceLine
from hackasm.assembler.symbols import SymbolTable
from hackasm.errors import FormatError, SourceLocation, SymbolLookupError


# =============================================================================
# Helper Functions
# =============================================================================

def make_lines(*texts: str) -> list[SourceLine]:
    return [
        SourceLine(text, SourceLocation("<test>", n), text)
        for n, text in enumerate(texts, start=1)
    ]


def generate(*texts: str, table: SymbolTable | None = None) -> list[str]:
    codegen = CodeGenerator(table if table is not None else SymbolTable())
    return codegen.generate(make_lines(*texts))


# =============================================================================
# Address-Load Tests
# =============================================================================

class TestAddressLoad:

    def test_small_number(self):
        assert generate("@2") == ["0000000000000010"]

    def test_zero(self):
        assert generate("@0") == ["0000000000000000"]

    def test_max_number(self):
        assert generate("@65535") == ["1111111111111111"]

    def test_overflow_truncated(self):
        assert generate("@65538") == ["0000000000000010"]

    @pytest.mark.parametrize("value", [1, 7, 255, 1024, 16384, 32767, 40000])
    def test_numbers_match_binary(self, value):
        (word,) = generate(f"@{value}")
        assert int(word, 2) == value

    def test_predefined_symbol(self):
        assert generate("@SCREEN") == ["0100000000000000"]
        assert generate("@R15") == ["0000000000001111"]

    def test_resolved_symbol(self):
        table = SymbolTable()
        table.allocate_variable("i")
        table.freeze()
        assert generate("@i", table=table) == ["0000000000010000"]

    def test_missing_symbol(self):
        with pytest.raises(SymbolLookupError) as exc_info:
            generate("@1", "@nowhere")
        assert exc_info.value.symbol == "nowhere"
        assert exc_info.value.location.line == 2

    def test_missing_symbol_is_lookup_error(self):
        with pytest.raises(LookupError):
            generate("@nowhere")


# =============================================================================
# Compute Tests
# =============================================================================

class TestCompute:

    def test_dest_comp(self):
        assert generate("D=D+1") == ["1110011111010000"]

    def test_comp_jump(self):
        assert generate("D;JGT") == ["1110001100000001"]

    def test_memory_increment(self):
        assert generate("M=M+1") == ["1111110111001000"]

    def test_lowercase_jump(self):
        assert generate("0;jmp") == ["1110101010000111"]

    def test_unknown_comp(self):
        with pytest.raises(FormatError, match="unknown compute mnemonic 'D\\*A'"):
            generate("D=D*A")

    def test_unknown_dest(self):
        with pytest.raises(FormatError, match="unknown destination"):
            generate("X=D")

    def test_unknown_jump(self):
        with pytest.raises(FormatError, match="unknown jump"):
            generate("0;JXX")

    def test_label_rejected(self):
        with pytest.raises(FormatError, match="unexpected label"):
            generate("(LOOP)")


# =============================================================================
# Program and Output Tests
# =============================================================================

class TestProgram:

    def test_order_preserved(self):
        words = generate("@2", "D=A", "@3", "D=D+A", "@0", "M=D")
        assert words == [
            "0000000000000010",
            "1110110000010000",
            "0000000000000011",
            "1110000010010000",
            "0000000000000000",
            "1110001100001000",
        ]

    def test_write_hack(self, tmp_path):
        codegen = CodeGenerator(SymbolTable())
        codegen.generate(make_lines("@2", "D=A"))
        out = tmp_path / "out.hack"
        codegen.write_hack(out)
        assert out.read_text() == "0000000000000010\n1110110000010000\n"

    def test_write_symbols(self, tmp_path):
        table = SymbolTable()
        table.allocate_variable("i")
        codegen = CodeGenerator(table)
        codegen.generate(make_lines("@i"))
        out = tmp_path / "out.sym"
        codegen.write_symbols(out)
        text = out.read_text()
        assert "i 16\n" in text
        assert "SCREEN 16384\n" in text

    def test_listing(self):
        codegen = CodeGenerator(SymbolTable())
        codegen.generate(make_lines("@2", "D=A"))
        listing = codegen.get_listing()
        assert "0000000000000010" in listing
        assert "D=A" in listing
        assert "KEYBOARD" in listing
