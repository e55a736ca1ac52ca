import json

import pytest

from executor import RUNTIME_ERROR_STATUS
from main import PARSE_ERROR_STATUS, lex, parse, process_program, run
from tokens import TokenType


GOOD = """program squares;
begin
  i := 1;
  repeat
    sq := i * i;
    write(sq:4:0);
    i := i + 1
  until i > 4;
  writeln
end.
"""


def test_lex_and_parse_helpers():
    tokens = lex("program p;")
    assert [t.type for t in tokens] == [
        TokenType.PROGRAM,
        TokenType.IDENTIFIER,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]

    program, error_count, symbols = parse("program p; begin x := 2 end.")
    assert error_count == 0
    assert program.text == "p"
    assert symbols.lookup("x") is not None


def test_run_returns_final_symbol_values():
    symbols = run("program p; begin x := 2; y := x * 3 end.")
    assert symbols.lookup("y").value == 6.0


def test_run_refuses_programs_with_errors(capsys):
    with pytest.raises(SyntaxError):
        run("program p; begin writeln(nope) end.")
    capsys.readouterr()


def test_process_program_executes_clean_program(capsys):
    assert process_program(GOOD) == 0
    assert capsys.readouterr().out == "   1   4   9  16\n"


def test_process_program_does_not_execute_with_errors(capsys):
    status = process_program("program p; begin writeln('ran'); writeln(z) end.")
    out = capsys.readouterr().out

    assert status == PARSE_ERROR_STATUS
    assert "ran" not in out
    assert out.endswith("\n1 syntax error.\n")


def test_process_program_runtime_error_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        process_program("program p; begin x := 0; y := 1 / x end.")

    assert exc.value.code == RUNTIME_ERROR_STATUS
    assert capsys.readouterr().out == "RUNTIME ERROR at line 1: Division by zero: /\n"


def test_process_program_prints_stages_and_symbols(capsys, tmp_path):
    path = tmp_path / "ast.json"
    status = process_program(
        "program p; begin x := 5 end.",
        print_tokens=True,
        print_ast=True,
        dump_ast_path=str(path),
        print_symbols=True,
    )
    out = capsys.readouterr().out

    assert status == 0
    assert "Tokens (" in out
    assert "Program(p)" in out
    assert f"{'x':<16} 5.000000" in out
    assert json.loads(path.read_text(encoding="utf-8"))["node_type"] == "PROGRAM"


def test_process_program_no_execute(capsys):
    assert process_program("program p; begin writeln('hi') end.", execute=False) == 0
    assert capsys.readouterr().out == ""
