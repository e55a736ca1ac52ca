"""Graphviz visualization helpers for ASTs.

Provides `render_ast_dot(program)` which returns a `graphviz.Digraph` object
(not rendered), with one graph node per AST node and an edge from each parent
to each of its children, in child order. `write_and_render` writes the file to
disk and needs the Graphviz binaries installed.

Node layout: each AST node is a small HTML-like table whose header is the
node kind and whose body is the node's source-like rendering. Statement nodes
are drawn with rounded cells; TEST nodes are highlighted because their
position inside a LOOP decides whether it is a pre-test or post-test loop.
"""

from typing import Optional
import html
from graphviz import Digraph
from ast_nodes import Node, NodeType, STATEMENT_TYPES
from pretty_printer import PrettyPrinter


def _node_html(node: Node) -> str:
    body = PrettyPrinter.print_surface(node)
    # Avoid empty FONT elements which some Graphviz versions reject
    escaped = html.escape(body) if body.strip() else "&nbsp;"
    bgcolor = ' BGCOLOR="#ffefef"' if node.type == NodeType.TEST else ""
    header = f"<TR><TD{bgcolor}><B>{html.escape(node.type.name)}</B></TD></TR>"
    line = f'<FONT POINT-SIZE="8">line {node.line}</FONT>'
    cell = f'<TR><TD><FONT POINT-SIZE="10">{escaped}</FONT><BR/>{line}</TD></TR>'
    style = ' STYLE="ROUNDED"' if node.type in STATEMENT_TYPES else ""
    return f'<<TABLE BORDER="0" CELLBORDER="1" CELLSPACING="0"{style}>{header}{cell}</TABLE>>'


def render_ast_dot(program: Node, title: Optional[str] = None) -> Digraph:
    """Return a graphviz.Digraph for the tree rooted at `program`.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    if title or program.text:
        dot.attr("graph", label=title or program.text, labelloc="t")

    # Iterative preorder walk; node ids follow visiting order.
    counter = 0
    stack = [(program, None)]
    while stack:
        node, parent_id = stack.pop()
        node_id = f"n{counter}"
        counter += 1

        dot.node(node_id, label=_node_html(node), shape="plaintext")
        if parent_id is not None:
            dot.edge(parent_id, node_id)

        for child in reversed(node.children):
            stack.append((child, node_id))

    return dot


def write_and_render(
    program: Node, out_path: str, fmt: str = "svg", title: Optional[str] = None
) -> None:
    """Write and render the AST to the given path (without extension).

    Example: write_and_render(tree, 'out/ast', fmt='png') will create out/ast.png
    (requires Graphviz)."""
    dot = render_ast_dot(program, title=title)
    dot.format = fmt
    # Note: render will append extension automatically
    dot.render(out_path, cleanup=True)
