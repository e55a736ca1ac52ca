import pytest

from ast_nodes import *
from tests.utils import parse_text


PROGRAMS = [
    """program sums;
begin
  i := 0; total := 0;
  while i < 10 do begin
    i := i + 1;
    if i mod 2 = 0 then total := total + i else total := total - 1
  end;
  write(total:8:1);
  writeln
end.
""",
    """program loops;
begin
  n := 3;
  repeat
    writeln('n = ');
    write(n:4);
    n := n - 1
  until (n <= 0) or not (n > 0);
  begin begin x := -n * 2.5 / (1 + n); y := +x end end
end.
""",
]

ARITY = {
    NodeType.PROGRAM: (1, 1),
    NodeType.ASSIGN: (2, 2),
    NodeType.TEST: (1, 1),
    NodeType.IF_STATEMENT: (2, 3),
    NodeType.WRITE: (1, 3),
    NodeType.WRITELN: (0, 3),
}
for kind in ARITHMETIC_TYPES | BOOLEAN_TYPES | RELATIONAL_TYPES:
    ARITY[kind] = (2, 2)
for kind in UNARY_TYPES:
    ARITY[kind] = (1, 1)
for kind in LEAF_TYPES:
    ARITY[kind] = (0, 0)


def _walk(node):
    yield node
    for child in node.children:
        yield from _walk(child)


@pytest.mark.parametrize("src", PROGRAMS)
def test_child_counts_match_node_kind(src):
    program, parser = parse_text(src)
    assert parser.error_count == 0

    for node in _walk(program):
        if node.type in ARITY:
            low, high = ARITY[node.type]
            assert low <= len(node.children) <= high, node
        if node.type == NodeType.LOOP:
            tests = [c for c in node.children if c.type == NodeType.TEST]
            assert len(tests) == 1
            assert node.children.index(tests[0]) in (0, len(node.children) - 1)
        if node.type == NodeType.IF_STATEMENT:
            assert node.children[0].type == NodeType.TEST
            assert all(c.type in STATEMENT_TYPES for c in node.children[1:])
        if node.type in (NodeType.COMPOUND, NodeType.PROGRAM):
            assert all(c.type in STATEMENT_TYPES for c in node.children)


@pytest.mark.parametrize("src", PROGRAMS)
def test_tree_ownership_is_strict(src):
    program, _ = parse_text(src)
    nodes = list(_walk(program))

    # No node is reachable twice
    assert len({id(n) for n in nodes}) == len(nodes)


@pytest.mark.parametrize("src", PROGRAMS)
def test_leaves_carry_entries_or_values_and_lines(src):
    program, parser = parse_text(src)

    for node in _walk(program):
        assert node.line >= 1
        if node.type == NodeType.VARIABLE:
            assert node.entry is parser.symbol_table.lookup(node.text)
        elif node.type in LEAF_TYPES:
            assert node.value is not None
        else:
            assert node.entry is None


def test_adopt_preserves_order_and_returns_child():
    parent = Node(NodeType.COMPOUND)
    first = parent.adopt(Node(NodeType.WRITELN))
    second = parent.adopt(Node(NodeType.WRITELN))

    assert parent.children == [first, second]
