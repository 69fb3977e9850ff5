# =============================================================================
# test_cli.py - manoasm Command-Line Tests
# =============================================================================
# Tests for the manoasm CLI using click's CliRunner.
# =============================================================================

from click.testing import CliRunner

from mano_asm.cli.errors import ExitCode
from mano_asm.cli.manoasm import main


PROGRAM = """\
START   ORG 2000
        INP
        OUT
        HLT
        END
"""


def write_source(tmp_path, text=PROGRAM, name="prog.asm"):
    path = tmp_path / name
    path.write_text(text)
    return path


class TestManoasmCLI:
    """Tests for the manoasm CLI tool."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Assemble basic computer source code" in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_cli_default_object_file(self, tmp_path):
        """Without -o the object file sits next to the input."""
        src = write_source(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, [str(src)])

        assert result.exit_code == 0
        obj = tmp_path / "prog.obj"
        assert obj.read_text().splitlines() == [
            "2000 1111100000000000",
            "2001 1111010000000000",
            "2002 0111000000000001",
        ]

    def test_cli_print_words(self, tmp_path):
        src = write_source(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, [str(src), "--print"])

        assert result.exit_code == 0
        assert "0x2000  1111100000000000  F800" in result.output
        assert "0x2002  0111000000000001  7001" in result.output
        assert not (tmp_path / "prog.obj").exists()

    def test_cli_all_outputs(self, tmp_path):
        src = write_source(tmp_path)
        out = tmp_path / "out.obj"
        lst = tmp_path / "out.lst"
        sym = tmp_path / "out.sym"

        runner = CliRunner()
        result = runner.invoke(main, [
            str(src), "-o", str(out), "-l", str(lst), "-s", str(sym), "-v",
        ])

        assert result.exit_code == 0
        assert out.exists() and lst.exists()
        assert "START $2000" in sym.read_text()
        assert "Assembly complete: 3 words" in result.output

    def test_cli_unknown_opcode(self, tmp_path):
        src = write_source(tmp_path, "ORG 10\nJMP X\nEND\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Assembly error" in result.output
        assert "unknown opcode 'JMP'" in result.output

    def test_cli_warning_reported(self, tmp_path):
        src = write_source(tmp_path, "LDA NOWHERE\nEND\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src), "-p"])

        assert result.exit_code == 0
        assert "undefined symbol 'NOWHERE'" in result.output

    def test_cli_verbose_warning_reported_once(self, tmp_path):
        src = write_source(tmp_path, "LDA NOWHERE\nEND\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src), "-p", "-v"])

        assert result.exit_code == 0
        assert result.output.count("undefined symbol 'NOWHERE'") == 1

    def test_cli_refuses_to_overwrite_input(self, tmp_path):
        """An input named *.obj is not replaced by its own object file."""
        src = write_source(tmp_path, name="prog.obj")

        runner = CliRunner()
        result = runner.invoke(main, [str(src)])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "would overwrite the input file" in result.output
        assert src.read_text() == PROGRAM

    def test_cli_listing_must_differ_from_input(self, tmp_path):
        src = write_source(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, [str(src), "-p", "-l", str(src)])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert src.read_text() == PROGRAM

    def test_cli_strict_symbols(self, tmp_path):
        src = write_source(tmp_path, "LDA NOWHERE\nEND\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src), "--strict-symbols"])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "undefined symbol 'NOWHERE'" in result.output

    def test_cli_strict_symbols_from_env(self, tmp_path):
        src = write_source(tmp_path, "LDA NOWHERE\nEND\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src)], env={"MANO_ASM_STRICT_SYMBOLS": "1"})

        assert result.exit_code == ExitCode.BUILD_ERROR

    def test_cli_flag_overrides_env(self, tmp_path):
        src = write_source(tmp_path, "LDA NOWHERE\nEND\n")

        runner = CliRunner()
        result = runner.invoke(
            main, [str(src), "-p", "--lenient-symbols"],
            env={"MANO_ASM_STRICT_SYMBOLS": "1"},
        )

        assert result.exit_code == 0

    def test_cli_allow_redefinition(self, tmp_path):
        src = write_source(tmp_path, "A DEC 1\nA DEC 2\nEND\n")

        runner = CliRunner()
        failed = runner.invoke(main, [str(src), "-p"])
        passed = runner.invoke(main, [str(src), "-p", "--allow-redefinition"])

        assert failed.exit_code == ExitCode.BUILD_ERROR
        assert "duplicate symbol 'A'" in failed.output
        assert passed.exit_code == 0

    def test_cli_missing_input(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.asm")])

        assert result.exit_code == 2
