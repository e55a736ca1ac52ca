"""Tests for the AST pretty printer, JSON export and Graphviz view."""

import json

from ast_json import ast_to_json, write_ast_json
from ast_viz import render_ast_dot
from pretty_printer import PrettyPrinter
from tests.utils import parse_text


SIMPLE = "program show; begin x := 1; x := x + 1; writeln(x:5:1) end."


def test_pretty_printer_outputs_labelled_tree():
    program, parser = parse_text(SIMPLE)
    assert parser.error_count == 0

    text = PrettyPrinter.print_ast(program)
    lines = text.splitlines()

    assert lines[0] == "Program(show)"
    assert lines[1] == "  Compound"
    assert "    stmt[0]: Assign" in lines
    assert "      target: Variable(x)" in lines
    assert "      value: IntegerConstant(1)" in lines
    assert "      value: Add(+)" in lines
    assert "      width: IntegerConstant(5)" in lines


def test_print_surface():
    program, _ = parse_text(SIMPLE)
    first, second, writeln = program.children[0].children

    assert PrettyPrinter.print_surface(first) == "x := 1"
    assert PrettyPrinter.print_surface(second) == "x := (x + 1)"
    assert PrettyPrinter.print_surface(writeln) == "writeln(x:5:1)"


def test_ast_to_json_is_serializable(tmp_path):
    program, _ = parse_text(SIMPLE)
    data = ast_to_json(program)

    assert data["node_type"] == "PROGRAM"
    assert data["text"] == "show"
    assign = data["children"][0]["children"][0]
    assert assign["node_type"] == "ASSIGN"
    assert assign["children"][0] == {
        "node_type": "VARIABLE",
        "line": 1,
        "text": "x",
        "entry": "x",
    }

    path = tmp_path / "ast.json"
    write_ast_json(program, str(path))
    assert json.loads(path.read_text(encoding="utf-8")) == data


def test_ast_viz_dot_source():
    program, _ = parse_text(SIMPLE)
    dot = render_ast_dot(program)
    src = dot.source

    assert "PROGRAM" in src
    assert "ASSIGN" in src
    assert "WRITELN" in src
    # Root to its COMPOUND child
    assert "n0 -> n1" in src
