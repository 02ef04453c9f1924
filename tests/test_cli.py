"""
Command line: program sources, options and exit codes.
"""

import io
import sys

import pytest

from bfengine import __version__
from bfengine.cli import (
    EXIT_INTERRUPTED,
    EXIT_LOAD_ERROR,
    EXIT_OK,
    EXIT_RUNTIME_ERROR,
    EXIT_STRUCTURAL_ERROR,
    main,
)


def _stdin(monkeypatch, data: bytes):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


def test_runs_program_file(tmp_path, capsysbinary):
    path = tmp_path / "sixty_four.b"
    path.write_text("++++++++[>++++++++<-]>.")
    assert main([str(path)]) == EXIT_OK
    assert capsysbinary.readouterr().out == b"@"


def test_eval_reads_program_input_from_stdin(monkeypatch, capsysbinary):
    _stdin(monkeypatch, b"A")
    assert main(["-e", ",."]) == EXIT_OK
    assert capsysbinary.readouterr().out == b"A"


def test_program_from_stdin(monkeypatch, capsysbinary):
    _stdin(monkeypatch, b"+++.")
    assert main([]) == EXIT_OK
    assert capsysbinary.readouterr().out == bytes([3])


def test_program_from_stdin_sees_end_of_input(monkeypatch, capsysbinary):
    _stdin(monkeypatch, b"++++,.")
    assert main(["--eof", "zero"]) == EXIT_OK
    assert capsysbinary.readouterr().out == bytes([0])


def test_empty_program_is_ok(monkeypatch, capsysbinary):
    _stdin(monkeypatch, b"  \n")
    assert main([]) == EXIT_OK
    assert capsysbinary.readouterr().out == b""


def test_halt_on_eof_exits_cleanly(monkeypatch, capsysbinary):
    _stdin(monkeypatch, b"abc")
    assert main(["--eof", "halt", "--no-flush", "-e", "+[,.]"]) == EXIT_OK
    assert capsysbinary.readouterr().out == b"abc"


def test_structural_error_exit_code(capsysbinary):
    assert main(["-e", "+[[-]"]) == EXIT_STRUCTURAL_ERROR
    err = capsysbinary.readouterr().err.decode()
    assert "unmatched '['" in err
    assert "offset 1" in err


def test_tape_bounds_exit_code(monkeypatch, capsysbinary):
    _stdin(monkeypatch, b"")
    assert main(["-t", "2", "-e", ">>"]) == EXIT_RUNTIME_ERROR
    err = capsysbinary.readouterr().err.decode()
    assert "TapeBoundsError" in err
    assert "tape length 2" in err


def test_missing_file_exit_code(tmp_path, capsysbinary):
    assert main([str(tmp_path / "nope.b")]) == EXIT_LOAD_ERROR
    assert b"unable to open file" in capsysbinary.readouterr().err


@pytest.mark.parametrize("value", ["0", "-1", "many"])
def test_rejects_bad_tape_length(value, capsys):
    with pytest.raises(SystemExit) as info:
        main(["-t", value, "-e", "+"])
    assert info.value.code == 2


def test_file_and_eval_together_is_usage_error(tmp_path, capsys):
    path = tmp_path / "p.b"
    path.write_text("+")
    with pytest.raises(SystemExit) as info:
        main([str(path), "-e", "+"])
    assert info.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])
    assert info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_verbose_logs_summary(monkeypatch, capsysbinary):
    _stdin(monkeypatch, b"")
    assert main(["-v", "-e", "+[-]"]) == EXIT_OK
    err = capsysbinary.readouterr().err.decode()
    assert "4 instruction(s), 1 loop(s)" in err


class InterruptedInput:
    def read(self, size=-1):
        raise KeyboardInterrupt


def test_interrupt_while_reading_program(monkeypatch, capsysbinary):
    monkeypatch.setattr(sys, "stdin", InterruptedInput())
    assert main([]) == EXIT_INTERRUPTED
    assert b"interrupted" in capsysbinary.readouterr().err
