"""Tests for the command-line entry point."""

import io
import sys

import pytest

from insnfreq.cli import main
from tests.unit.conftest import build_file, i32, string_table

HALT = b"\xf0"


@pytest.fixture
def program(tmp_path):
    path = tmp_path / "prog.bc"
    path.write_bytes(build_file(b"\x10" + i32(5) + b"\x01\x01" + HALT))
    return path


class TestMain:
    def test_prints_report(self, program, capsys):
        assert main([str(program)]) == 0
        out = capsys.readouterr().out
        assert out == "2 x BINOP +\n1 x CONST 5\n"

    def test_missing_argument_prints_usage(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code != 0
        assert "usage" in capsys.readouterr().err

    def test_decode_error_exits_with_failure(self, tmp_path, capsys):
        path = tmp_path / "bad.bc"
        path.write_bytes(build_file(b"\x01\x99" + HALT))
        assert main([str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "InvalidOpcode" in captured.err

    def test_load_error_exits_with_failure(self, tmp_path, capsys):
        path = tmp_path / "empty.bc"
        path.write_bytes(b"")
        assert main([str(path)]) == 1
        assert "TruncatedHeader" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.bc")]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_listing_flag(self, program, capsys):
        assert main([str(program), "--listing"]) == 0
        out = capsys.readouterr().out
        assert "00000000: CONST 5" in out
        assert "00000007: <end>" in out
        assert out.endswith("2 x BINOP +\n1 x CONST 5\n")

    def test_stats_go_to_stderr(self, program, capsys):
        assert main([str(program), "--stats"]) == 0
        captured = capsys.readouterr()
        assert "Disassembly Statistics" in captured.err
        assert "Disassembly Statistics" not in captured.out


class TestOutputEncoding:
    @pytest.fixture
    def lambda_program(self, tmp_path):
        path = tmp_path / "lambda.bc"
        code = b"\x12" + i32(0) + i32(0) + HALT
        path.write_bytes(build_file(code, string_table("λ")))
        return path

    def test_non_ascii_tag_is_written_as_utf8(self, lambda_program, capsysbinary):
        assert main([str(lambda_program)]) == 0
        assert capsysbinary.readouterr().out == "1 x SEXP\tλ 0\n".encode("utf-8")

    def test_utf8_even_when_stdout_defaults_to_latin1(
        self, lambda_program, monkeypatch
    ):
        buffer = io.BytesIO()
        monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(buffer, encoding="latin-1"))
        assert main([str(lambda_program)]) == 0
        sys.stdout.flush()
        assert buffer.getvalue() == "1 x SEXP\tλ 0\n".encode("utf-8")

    def test_undecodable_string_bytes_are_written_raw(self, tmp_path, capsysbinary):
        path = tmp_path / "raw.bc"
        code = b"\x57" + i32(0) + i32(1) + HALT
        path.write_bytes(build_file(code, b"\xff\x00"))
        assert main([str(path)]) == 0
        assert capsysbinary.readouterr().out == b"1 x TAG\t\xff 1\n"
