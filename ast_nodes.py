"""AST node definitions for the Pascal subset.

The parser builds a tree of `Node` objects and the executor walks it. Every
node has a `NodeType` kind that fixes how many children it has and what each
child means:

- PROGRAM: one COMPOUND child; `text` holds the program name.
- COMPOUND: zero or more statements, executed in order.
- ASSIGN: [VARIABLE target, expression].
- LOOP: statements plus exactly one TEST. A TEST in first position gives a
    pre-test loop (WHILE), in last position a post-test loop (REPEAT).
- TEST: one boolean expression; true ends the enclosing LOOP.
- IF_STATEMENT: [TEST, then-branch, optional else-branch].
- WRITE / WRITELN: [value, optional field width, optional decimal places].
- Binary operators have two operands, unary operators one.
- VARIABLE and the three constant kinds are leaves.

Conventions:
- `line` is the 1-based source line of the token that started the node.
- `text` is the identifier name for VARIABLE nodes and the operator spelling
    for operator nodes; it is what runtime diagnostics print.
- `entry` is set only on VARIABLE nodes. It refers to a symbol table entry
    that the tree does not own.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union, List
from symbols import SymbolTableEntry


class NodeType(Enum):
    PROGRAM = auto()
    COMPOUND = auto()
    ASSIGN = auto()
    LOOP = auto()
    TEST = auto()
    IF_STATEMENT = auto()
    WRITE = auto()
    WRITELN = auto()

    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULUS = auto()
    AND_OP = auto()
    OR_OP = auto()

    EQ = auto()
    LT = auto()
    LE = auto()
    GE = auto()
    GT = auto()
    NE = auto()

    NOT_OP = auto()
    NEGATE = auto()
    POSITIVE = auto()

    VARIABLE = auto()
    INTEGER_CONSTANT = auto()
    REAL_CONSTANT = auto()
    STRING_CONSTANT = auto()

    def __str__(self) -> str:
        return self.name


STATEMENT_TYPES = frozenset(
    {
        NodeType.COMPOUND,
        NodeType.ASSIGN,
        NodeType.LOOP,
        NodeType.IF_STATEMENT,
        NodeType.WRITE,
        NodeType.WRITELN,
    }
)

ARITHMETIC_TYPES = frozenset(
    {
        NodeType.ADD,
        NodeType.SUBTRACT,
        NodeType.MULTIPLY,
        NodeType.DIVIDE,
        NodeType.MODULUS,
    }
)

BOOLEAN_TYPES = frozenset({NodeType.AND_OP, NodeType.OR_OP})

RELATIONAL_TYPES = frozenset(
    {
        NodeType.EQ,
        NodeType.LT,
        NodeType.LE,
        NodeType.GE,
        NodeType.GT,
        NodeType.NE,
    }
)

UNARY_TYPES = frozenset({NodeType.NOT_OP, NodeType.NEGATE, NodeType.POSITIVE})

LEAF_TYPES = frozenset(
    {
        NodeType.VARIABLE,
        NodeType.INTEGER_CONSTANT,
        NodeType.REAL_CONSTANT,
        NodeType.STRING_CONSTANT,
    }
)


@dataclass(eq=False)
class Node:
    type: NodeType
    line: int = 0
    text: Optional[str] = None
    entry: Optional[SymbolTableEntry] = None
    value: Optional[Union[int, float, str]] = None
    children: List[Node] = field(default_factory=list)

    def adopt(self, child: Node) -> Node:
        """Append a child, preserving order, and return it."""
        self.children.append(child)
        return child

    def __repr__(self) -> str:
        extra = f", {self.text!r}" if self.text is not None else ""
        return f"Node({self.type}{extra}, line={self.line}, children={len(self.children)})"
