"""Generic pre-order traversal over syntax nodes."""

from collections.abc import Callable
from dataclasses import fields

from js_constraint_extractor.syntax.nodes import Node


def walk(node: Node | list | tuple, visitor: Callable[[Node], None]) -> None:
    """Visit a node and everything reachable through its fields.

    The visitor is called once for ``node``, then the walk recurses into each
    dataclass field holding a node or a (possibly nested) sequence, in field
    declaration order. Scalar fields are ignored. There is no cycle detection;
    syntax trees are acyclic.

    Args:
        node: Root node, or a sequence of nodes
        visitor: Called with every node reached, parents before children
    """
    if isinstance(node, list | tuple):
        for item in node:
            if isinstance(item, Node | list | tuple):
                walk(item, visitor)
        return

    visitor(node)

    for f in fields(node):
        child = getattr(node, f.name)
        if isinstance(child, Node | list | tuple):
            walk(child, visitor)
