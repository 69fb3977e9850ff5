# =============================================================================
# test_assembler.py - Assembler Facade Integration Tests
# =============================================================================
# End-to-end tests for the Assembler class: string, line list and file
# input, result accessors, and the listing/symbol/object writers.
# =============================================================================

import pytest

from mano_asm import (
    Assembler,
    AssemblerConfig,
    AssemblerError,
    AssemblySyntaxError,
    UndefinedSymbolError,
    UnknownOpcodeError,
    assemble,
    assemble_file,
)


SOURCE = """\
/ Add two numbers and halt
        ORG 100
        LDA A       ; load first operand
        ADD B
        STA C
        HLT
A       DEC 83
B       DEC -23
C       HEX 0
        END
"""


# =============================================================================
# Full Assembly Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline from source to words."""

    def test_assemble_string(self):
        asm = Assembler()
        ctx = asm.assemble_string(SOURCE)
        assert asm.get_symbols() == {"A": 0x104, "B": 0x105, "C": 0x106}
        assert [w.hex for w in ctx.words] == [
            "2104", "1105", "3106", "7001", "0053", "FFE9", "0000",
        ]
        assert not asm.has_warnings()

    def test_assemble_lines(self):
        asm = Assembler()
        asm.assemble_lines(["ORG 2000", "INP", "OUT", "HLT", "END"])
        assert [w.address for w in asm.get_words()] == [0x2000, 0x2001, 0x2002]

    def test_assemble_word_lists(self):
        """Pre-split token lists are accepted."""
        ctx = assemble([["X", "DEC", "7"], ["LDA", "X"]])
        assert ctx.words[1].binary == "0010000000000000"

    def test_assemble_file(self, tmp_path):
        src = tmp_path / "prog.asm"
        src.write_text(SOURCE)
        ctx = assemble_file(src)
        assert len(ctx.words) == 7
        assert ctx.instructions[1].location.filename == str(src)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Assembler().assemble_file(tmp_path / "missing.asm")

    def test_comment_chars_from_config(self):
        """With '/' removed from the comment set it becomes part of a token."""
        asm = Assembler(AssemblerConfig(comment_chars=";"))
        with pytest.raises(UnknownOpcodeError):
            asm.assemble_string("/ header\nHLT\n")


# =============================================================================
# Result and Error Handling Tests
# =============================================================================

class TestResults:
    """Test result accessors across runs."""

    def test_no_result_before_assembly(self):
        with pytest.raises(AssemblerError):
            Assembler().get_symbols()

    def test_failed_run_clears_result(self):
        """A failed run does not leave the previous result behind."""
        asm = Assembler()
        asm.assemble_lines(["A DEC 0"])
        with pytest.raises(AssemblySyntaxError):
            asm.assemble_lines(["A B C D E"])
        with pytest.raises(AssemblerError):
            asm.get_words()

    def test_runs_are_independent(self):
        asm = Assembler()
        asm.assemble_lines(["A DEC 0", "END"])
        asm.assemble_lines(["B DEC 0", "END"])
        assert asm.get_symbols() == {"B": 0}

    def test_warnings(self):
        asm = Assembler()
        asm.assemble_lines(["LDA NOWHERE", "END"])
        assert asm.has_warnings()
        assert "undefined symbol 'NOWHERE'" in asm.get_warnings()[0]

    def test_strict_config(self):
        asm = Assembler(AssemblerConfig(strict_symbols=True))
        with pytest.raises(UndefinedSymbolError):
            asm.assemble_lines(["LDA NOWHERE", "END"])


# =============================================================================
# File Output Tests
# =============================================================================

class TestFileOutput:
    """Test writing listing, symbol and object files."""

    def test_write_object(self, tmp_path):
        asm = Assembler()
        asm.assemble_string(SOURCE)
        out = tmp_path / "prog.obj"
        asm.write_object(out)
        lines = out.read_text().splitlines()
        assert lines[0] == "0100 0010000100000100"
        assert len(lines) == 7

    def test_write_listing(self, tmp_path):
        asm = Assembler()
        asm.assemble_string(SOURCE)
        out = tmp_path / "prog.lst"
        asm.write_listing(out)
        text = out.read_text()
        assert "LDA A" in text
        assert "Symbol table:" in text

    def test_write_symbols(self, tmp_path):
        asm = Assembler()
        asm.assemble_string(SOURCE)
        out = tmp_path / "prog.sym"
        asm.write_symbols(out)
        assert out.read_text().splitlines()[2:] == ["A $0104", "B $0105", "C $0106"]
