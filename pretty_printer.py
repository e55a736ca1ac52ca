"""Pretty-printer for the AST.

Provides `PrettyPrinter.print_ast(node, indent, prefix)` which renders a tree
into a readable multi-line string, and `PrettyPrinter.print_surface(node)`
which renders a node back into compact Pascal-like source on one line. Both
are intended for debugging, tests and visualizations rather than for
producing source code that round-trips exactly (a WHILE loop surfaces as its
desugared LOOP form, for instance).

Examples:
    PrettyPrinter.print_ast(program_node)
    PrettyPrinter.print_surface(assign_node)   # 'x := x + 1'
"""

from __future__ import annotations
from ast_nodes import *


OPERATOR_SPELLINGS = {
    NodeType.ADD: "+",
    NodeType.SUBTRACT: "-",
    NodeType.MULTIPLY: "*",
    NodeType.DIVIDE: "/",
    NodeType.MODULUS: "mod",
    NodeType.AND_OP: "and",
    NodeType.OR_OP: "or",
    NodeType.EQ: "=",
    NodeType.LT: "<",
    NodeType.LE: "<=",
    NodeType.GE: ">=",
    NodeType.GT: ">",
    NodeType.NE: "<>",
    NodeType.NOT_OP: "not ",
    NodeType.NEGATE: "-",
    NodeType.POSITIVE: "+",
}


class PrettyPrinter:
    @staticmethod
    def print_ast(node: Node, indent: int = 0, prefix: str = "") -> str:
        """Pretty print AST and return as string."""
        lines = []
        indent_str = " " * indent

        match node.type:
            case NodeType.PROGRAM:
                lines.append(f"{indent_str}{prefix}Program({node.text})")

            case NodeType.VARIABLE:
                lines.append(f"{indent_str}{prefix}Variable({node.text})")

            case NodeType.INTEGER_CONSTANT | NodeType.REAL_CONSTANT:
                lines.append(f"{indent_str}{prefix}{_title(node.type)}({node.value})")

            case NodeType.STRING_CONSTANT:
                lines.append(f"{indent_str}{prefix}StringConstant({node.value!r})")

            case t if t in ARITHMETIC_TYPES | BOOLEAN_TYPES | RELATIONAL_TYPES:
                lines.append(f"{indent_str}{prefix}{_title(t)}({node.text})")

            case _:
                lines.append(f"{indent_str}{prefix}{_title(node.type)}")

        # Label the children whose role depends on their position.
        for i, child in enumerate(node.children):
            lines.append(
                PrettyPrinter.print_ast(child, indent + 2, _child_label(node, i))
            )

        return "\n".join(line for line in lines if line)

    @staticmethod
    def print_surface(node: Node) -> str:
        """Return a compact, source-like one-line representation of a node."""
        if node is None:
            return ""

        def _p(n: Node) -> str:
            return PrettyPrinter.print_surface(n)

        kids = node.children
        match node.type:
            case NodeType.PROGRAM:
                return f"program {node.text}"
            case NodeType.COMPOUND:
                return "begin ... end"
            case NodeType.ASSIGN:
                return f"{_p(kids[0])} := {_p(kids[1])}"
            case NodeType.LOOP:
                return "loop"
            case NodeType.TEST:
                return f"exit when {_p(kids[0])}"
            case NodeType.IF_STATEMENT:
                return f"if {_p(kids[0].children[0])}"
            case NodeType.WRITE | NodeType.WRITELN:
                keyword = node.type.name.lower()
                if not kids:
                    return keyword
                return f"{keyword}({':'.join(_p(k) for k in kids)})"
            case NodeType.VARIABLE:
                return node.text
            case NodeType.INTEGER_CONSTANT | NodeType.REAL_CONSTANT:
                return node.text if node.text is not None else str(node.value)
            case NodeType.STRING_CONSTANT:
                return "'" + node.value.replace("'", "''") + "'"
            case t if t in UNARY_TYPES:
                return f"{OPERATOR_SPELLINGS[t]}{_p(kids[0])}"
            case t:
                op = node.text if node.text is not None else OPERATOR_SPELLINGS[t]
                return f"({_p(kids[0])} {op} {_p(kids[1])})"


def _title(node_type: NodeType) -> str:
    """INTEGER_CONSTANT -> IntegerConstant"""
    return "".join(part.capitalize() for part in node_type.name.split("_"))


def _child_label(node: Node, index: int) -> str:
    match node.type:
        case NodeType.ASSIGN:
            return ("target: ", "value: ")[index]
        case NodeType.IF_STATEMENT:
            return ("test: ", "then: ", "else: ")[index]
        case NodeType.WRITE | NodeType.WRITELN:
            return ("value: ", "width: ", "decimals: ")[index]
        case NodeType.COMPOUND | NodeType.LOOP:
            return f"stmt[{index}]: "
        case t if t in ARITHMETIC_TYPES | BOOLEAN_TYPES | RELATIONAL_TYPES:
            return ("left: ", "right: ")[index]
    return ""
