import io
import logging

import pytest

from calcy.__main__ import main
from calcy.config import Strategy
from calcy.interpreter import Interpreter, repl


class Lines(io.StringIO):
    def isatty(self):
        return False


def run_repl(text, interpreter=None):
    out = io.StringIO()
    repl(interpreter or Interpreter(), stdin=Lines(text), stdout=out)
    return out.getvalue()


def test_rep_formats_values_and_errors():
    interp = Interpreter()
    assert interp.rep("(+ 1 2)") == "= 3"
    assert interp.rep("(function (x) x)") == "= (function (x) x)"
    assert interp.rep("(+ 1 2 3)") == '"+" expects 2 arguments, instead got 3'
    assert interp.rep("(+ 1") == 'Expected ")" at the end of the input'
    assert interp.rep("   ") is None


def test_rep_logs_errors_at_debug(caplog):
    interp = Interpreter()
    with caplog.at_level(logging.DEBUG, logger="calcy.interpreter"):
        interp.rep("nope")
    assert any("nope" in r.getMessage() for r in caplog.records)


def test_repl_keeps_state_between_lines():
    output = run_repl("(define x 2)\n\n(* x 21)\n(define x 3)\nx\n")
    assert output.splitlines() == [
        "= 2",
        "= 42",
        'Can\'t redefine "x" variable',
        "= 2",
    ]


def test_repl_stops_at_end_of_input():
    assert run_repl("") == ""


# -----------------------------------------------------
# Command line
# -----------------------------------------------------


def test_main_runs_a_file(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("CALCY_STRATEGY", raising=False)
    source = tmp_path / "fact.calcy"
    source.write_text(
        "; factorial\n"
        "(define fact (function (n) (if (< n 1) 1 (* n (fact (- n 1))))))\n"
        "(fact 5)\n"
    )
    assert main([str(source)]) == 0
    assert capsys.readouterr().out == "120\n"


def test_main_reports_evaluation_errors(tmp_path, capsys):
    source = tmp_path / "bad.calcy"
    source.write_text("(+ 1 unknownVariable)")
    assert main([str(source)]) == 1
    assert "unknownVariable" in capsys.readouterr().err


def test_main_reports_missing_files(tmp_path, capsys):
    assert main([str(tmp_path / "missing.calcy")]) == 1
    assert "file not found" in capsys.readouterr().err


def test_main_strategy_flag(tmp_path, capsys):
    source = tmp_path / "lazy.calcy"
    source.write_text("((function (x) 0) unknownVariable)")
    assert main(["--strategy", "need", str(source)]) == 0
    assert capsys.readouterr().out == "0\n"
    assert main(["--strategy", "value", str(source)]) == 1


def test_main_rejects_unknown_strategy_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--strategy", "sideways"])
    assert excinfo.value.code == 2
    assert "Unknown strategy" in capsys.readouterr().err


def test_main_rejects_bad_environment(monkeypatch, capsys):
    monkeypatch.setenv("CALCY_MAX_DEPTH", "lots")
    assert main([]) == 2
    assert "CALCY_MAX_DEPTH" in capsys.readouterr().err


def test_main_without_file_starts_the_repl(monkeypatch):
    seen = {}

    def fake_repl(interpreter):
        seen["strategy"] = interpreter.config.strategy

    monkeypatch.setattr("calcy.__main__.repl", fake_repl)
    assert main(["--strategy", "by-name"]) == 0
    assert seen["strategy"] is Strategy.NAME
