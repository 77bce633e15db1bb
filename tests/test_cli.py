# =============================================================================
# test_cli.py - hackasm Command-Line Tests
# =============================================================================
# Tests for the click-based hackasm command: output file naming, auxiliary
# outputs, mnemonic policy flags and exit codes.
# =============================================================================

from pathlib import Path

import pytest
from click.testing import CliRunner

from hackasm.cli.errors import ExitCode
from hackasm.cli.hackasm import main


ADD_SOURCE = "// R0 = 2 + 3\n@2\nD=A\n@3\nD=D+A\n@0\nM=D\n"

ADD_HACK = (
    "0000000000000010\n"
    "1110110000010000\n"
    "0000000000000011\n"
    "1110000010010000\n"
    "0000000000000000\n"
    "1110001100001000\n"
)


@pytest.fixture
def add_file(tmp_path: Path) -> Path:
    src = tmp_path / "Add.asm"
    src.write_text(ADD_SOURCE)
    return src


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

    def test_default_output_name(self, add_file):
        """Output defaults to the input path with a .hack suffix."""
        runner = CliRunner()
        result = runner.invoke(main, [str(add_file)])

        assert result.exit_code == ExitCode.SUCCESS
        assert add_file.with_suffix(".hack").read_text() == ADD_HACK

    def test_explicit_output(self, add_file, tmp_path):
        out = tmp_path / "build.hack"
        runner = CliRunner()
        result = runner.invoke(main, [str(add_file), "-o", str(out)])

        assert result.exit_code == 0
        assert out.read_text() == ADD_HACK
        assert not add_file.with_suffix(".hack").exists()

    def test_symbol_and_listing_files(self, tmp_path):
        src = tmp_path / "Loop.asm"
        src.write_text("(LOOP)\n@i\nM=M+1\n@LOOP\n0;JMP\n")
        sym = tmp_path / "Loop.sym"
        lst = tmp_path / "Loop.lst"

        runner = CliRunner()
        result = runner.invoke(main, [str(src), "-s", str(sym), "-l", str(lst)])

        assert result.exit_code == 0
        assert "LOOP" in sym.read_text()
        assert "i" in sym.read_text().split()
        assert "0003  1110101010000111  0;JMP" in lst.read_text()

    def test_assembly_error_exit_code(self, tmp_path):
        src = tmp_path / "Bad.asm"
        src.write_text("@1\nD=D+D\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "unknown computation 'D+D'" in result.output
        assert not src.with_suffix(".hack").exists()

    def test_strict_is_default(self, tmp_path):
        src = tmp_path / "Dest.asm"
        src.write_text("X=D\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "unknown destination 'X'" in result.output

    def test_permissive_flag(self, tmp_path):
        src = tmp_path / "Dest.asm"
        src.write_text("X=D\n")

        runner = CliRunner()
        result = runner.invoke(main, ["--permissive", str(src)])
        assert result.exit_code == 0
        assert src.with_suffix(".hack").read_text() == "1110001100000000\n"

    def test_missing_input(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.asm")])
        assert result.exit_code == 2

    def test_verbose(self, add_file):
        runner = CliRunner()
        result = runner.invoke(main, ["-v", str(add_file)])
        assert result.exit_code == 0
        assert "Assembly complete: 6 words" in result.output
