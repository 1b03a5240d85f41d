# =============================================================================
# test_cli.py - hackasm Command-Line Tests
# =============================================================================

from click.testing import CliRunner

from hackasm.cli.errors import ExitCode
from hackasm.cli.hackasm import main


class TestHackasmCLI:
    """Tests for the hackasm CLI tool."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Assemble Hack assembly" in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_default_output_name(self, tmp_path):
        src = tmp_path / "Add.asm"
        src.write_text("@2\nD=A\n@3\nD=D+A\n@0\nM=D\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src)])

        assert result.exit_code == 0
        out = tmp_path / "Add.hack"
        assert out.read_text().splitlines() == [
            "0000000000000010",
            "1110110000010000",
            "0000000000000011",
            "1110000010010000",
            "0000000000000000",
            "1110001100001000",
        ]

    def test_explicit_outputs(self, tmp_path):
        src = tmp_path / "prog.asm"
        src.write_text("@i\nM=1\n(END)\n0;JMP:END\n")
        out = tmp_path / "out.hack"
        lst = tmp_path / "out.lst"
        sym = tmp_path / "out.sym"

        runner = CliRunner()
        result = runner.invoke(
            main, [str(src), "-o", str(out), "-l", str(lst), "-s", str(sym)]
        )

        assert result.exit_code == 0
        assert len(out.read_text().splitlines()) == 4
        assert "END 2" in sym.read_text()
        assert "i 16" in sym.read_text()
        assert "Symbol Table" in lst.read_text()

    def test_verbose_summary(self, tmp_path):
        src = tmp_path / "prog.asm"
        src.write_text("@2\n")

        runner = CliRunner()
        result = runner.invoke(main, ["-v", str(src)])

        assert result.exit_code == 0
        assert "Assembly complete: 1 instructions" in result.output

    def test_assembly_error_exit_code(self, tmp_path):
        src = tmp_path / "bad.asm"
        src.write_text("@2\nD=D*A\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "bad.asm:2: error:" in result.output
        assert not (tmp_path / "bad.hack").exists()

    def test_missing_input(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.asm")])

        assert result.exit_code == ExitCode.INVALID_ARGS
