"""JavaScript syntax trees for constraint extraction."""

from js_constraint_extractor.syntax.converter import JavaScriptParser, ParsedSource
from js_constraint_extractor.syntax.nodes import (
    BinaryExpression,
    CallExpression,
    FunctionDeclaration,
    GenericNode,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    Program,
    UnaryExpression,
)
from js_constraint_extractor.syntax.walker import walk

__all__ = [
    # Parsing
    "JavaScriptParser",
    "ParsedSource",
    # Nodes
    "Node",
    "Program",
    "FunctionDeclaration",
    "Identifier",
    "Literal",
    "CallExpression",
    "MemberExpression",
    "BinaryExpression",
    "UnaryExpression",
    "GenericNode",
    # Traversal
    "walk",
]
