"""Tree-walking executor for parsed Pascal programs.

`Executor.execute(program)` walks the tree produced by `Parser.parse_program`
with ordinary recursive calls, updating symbol table entries and writing
WRITE/WRITELN output as it goes. Values are Python floats (every number is
real at run time), strs (only as WRITE arguments) and bools (results of
relational and logical operators).

A fatal runtime error, such as division by zero, prints one diagnostic line
and terminates the process with `RUNTIME_ERROR_STATUS`; no statement after it
runs. Only trees from a parse with zero errors should be executed.
"""

import math
import sys
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, List, NoReturn, Optional, TextIO
from ast_nodes import *

RUNTIME_ERROR_STATUS = 3


class Executor:
    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def execute(self, program: Node) -> None:
        """Execute a PROGRAM node for its side effects."""
        self.visit(program)

    def visit(self, node: Node) -> Any:
        match node.type:
            case NodeType.PROGRAM:
                return self.visit(node.children[0])
            case t if t in STATEMENT_TYPES:
                return self.visit_statement(node)
            case NodeType.TEST:
                return self.visit_test(node)
            case _:
                return self.visit_expression(node)

    def visit_statement(self, node: Node) -> None:
        match node.type:
            case NodeType.COMPOUND:
                for statement in node.children:
                    self.visit(statement)
            case NodeType.ASSIGN:
                target, expr = node.children
                target.entry.value = self.number(expr, target)
            case NodeType.LOOP:
                self.visit_loop(node)
            case NodeType.IF_STATEMENT:
                if self.visit_test(node.children[0]):
                    self.visit(node.children[1])
                elif len(node.children) == 3:
                    self.visit(node.children[2])
            case NodeType.WRITE:
                self.print_value(node.children)
            case NodeType.WRITELN:
                if node.children:
                    self.print_value(node.children)
                self.emit("\n")
            case _:
                raise RuntimeError(f"Unhandled statement node: {node}")

    def visit_loop(self, loop: Node) -> None:
        """Run the children in order until a TEST child evaluates true."""
        while True:
            for child in loop.children:
                if child.type == NodeType.TEST:
                    if self.visit_test(child):
                        return
                else:
                    self.visit(child)

    def visit_test(self, test: Node) -> bool:
        return self.boolean(test.children[0], test)

    def visit_expression(self, node: Node) -> Any:
        match node.type:
            case NodeType.VARIABLE:
                return node.entry.value
            case NodeType.INTEGER_CONSTANT:
                try:
                    return float(node.value)
                except OverflowError:
                    # Past the float range, read like a REAL such as 1e999.
                    return math.inf
            case NodeType.REAL_CONSTANT | NodeType.STRING_CONSTANT:
                return node.value

            case NodeType.NOT_OP:
                return not self.boolean(node.children[0], node)
            case NodeType.NEGATE:
                return -self.number(node.children[0], node)
            case NodeType.POSITIVE:
                return self.number(node.children[0], node)

            case NodeType.AND_OP | NodeType.OR_OP:
                # Both operands are always evaluated.
                left = self.boolean(node.children[0], node)
                right = self.boolean(node.children[1], node)
                if node.type == NodeType.AND_OP:
                    return left and right
                return left or right

            case t if t in RELATIONAL_TYPES:
                left = self.number(node.children[0], node)
                right = self.number(node.children[1], node)
                match t:
                    case NodeType.EQ:
                        return left == right
                    case NodeType.LT:
                        return left < right
                    case NodeType.LE:
                        return left <= right
                    case NodeType.GE:
                        return left >= right
                    case NodeType.GT:
                        return left > right
                    case NodeType.NE:
                        return left != right

            case t if t in ARITHMETIC_TYPES:
                left = self.number(node.children[0], node)
                right = self.number(node.children[1], node)
                match t:
                    case NodeType.ADD:
                        return left + right
                    case NodeType.SUBTRACT:
                        return left - right
                    case NodeType.MULTIPLY:
                        return left * right
                    case NodeType.DIVIDE:
                        if right == 0.0:
                            self.runtime_error(node, "Division by zero")
                        return left / right
                    case NodeType.MODULUS:
                        if right == 0.0:
                            self.runtime_error(node, "Division by zero")
                        return math.fmod(left, right)

        raise RuntimeError(f"Unhandled expression node: {node}")

    def number(self, node: Node, context: Node) -> float:
        value = self.visit(node)
        if not isinstance(value, float):
            self.runtime_error(context, "Incompatible types")
        return value

    def boolean(self, node: Node, context: Node) -> bool:
        value = self.visit(node)
        if not isinstance(value, bool):
            self.runtime_error(context, "Incompatible types")
        return value

    def print_value(self, children: List[Node]) -> None:
        """Format and emit a WRITE/WRITELN value with its optional format."""
        width = 0
        decimals = 0
        if len(children) > 1:
            width = int(self.number(children[1], children[1]))
            if len(children) > 2:
                decimals = int(self.number(children[2], children[2]))

        value = self.visit(children[0])
        if isinstance(value, str):
            self.emit(format_string(value, width))
        else:
            self.emit(format_real(value, width, decimals))

    def emit(self, text: str) -> None:
        out = self.out if self.out is not None else sys.stdout
        out.write(text)

    def runtime_error(self, node: Node, message: str) -> NoReturn:
        """Report a fatal runtime error and terminate the run."""
        out = self.out if self.out is not None else sys.stdout
        out.write(f"RUNTIME ERROR at line {node.line}: {message}: {node.text}\n")
        out.flush()
        sys.exit(RUNTIME_ERROR_STATUS)


def format_real(value: float, width: int = 0, decimals: int = 0) -> str:
    """Fixed-point text for a number, rounding halves away from zero."""
    if math.isnan(value):
        text = "NaN"
    elif math.isinf(value):
        text = "Infinity" if value > 0 else "-Infinity"
    else:
        quantum = Decimal(1).scaleb(-max(decimals, 0))
        # Wide enough for every digit of any finite double.
        context = Context(prec=400 + max(decimals, 0))
        rounded = Decimal(value).quantize(
            quantum, rounding=ROUND_HALF_UP, context=context
        )
        text = f"{rounded:f}"
    if width > 0:
        return text.rjust(width)
    return text


def format_string(value: str, width: int = 0) -> str:
    """Right-justify to a positive width, left-justify to a negative one."""
    if width > 0:
        return value.rjust(width)
    if width < 0:
        return value.ljust(-width)
    return value
