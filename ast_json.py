"""Convert AST nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure of
dicts/lists/primitives describing a tree, and `write_ast_json(node, path)`
which dumps it to a file. Variable nodes record the name of the entry they
refer to rather than the entry itself, since entries belong to the symbol
table and not to the tree.
"""

import json
from typing import Any, Dict, Optional
from ast_nodes import Node


def ast_to_json(node: Optional[Node]) -> Any:
    if node is None:
        return None

    data: Dict[str, Any] = {"node_type": node.type.name, "line": node.line}
    if node.text is not None:
        data["text"] = node.text
    if node.value is not None:
        data["value"] = node.value
    if node.entry is not None:
        data["entry"] = node.entry.name
    if node.children:
        data["children"] = [ast_to_json(child) for child in node.children]
    return data


def write_ast_json(node: Node, path: str) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(ast_to_json(node), fh, indent=2)
