"""Syntax tree node types consumed by the constraint extractor."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class Node:
    """Base for all syntax nodes.

    Attributes:
        range: (start, end) UTF-8 byte offsets into the original source
    """

    kind: ClassVar[str] = "Node"

    range: tuple[int, int]


@dataclass
class Identifier(Node):
    """A bare name, property name or `undefined`."""

    kind: ClassVar[str] = "Identifier"

    name: str = ""


@dataclass
class Literal(Node):
    """A number, string, boolean, null or regex literal."""

    kind: ClassVar[str] = "Literal"

    value: str | int | float | bool | None = None
    raw: str = ""


@dataclass
class FunctionDeclaration(Node):
    """A named (or anonymous) `function` declaration."""

    kind: ClassVar[str] = "FunctionDeclaration"

    id: Identifier | None = None
    params: list[Node] = field(default_factory=list)
    body: Node | None = None


@dataclass
class CallExpression(Node):
    kind: ClassVar[str] = "CallExpression"

    callee: Node | None = None
    arguments: list[Node] = field(default_factory=list)


@dataclass
class MemberExpression(Node):
    """Property access: `object.property` or `object[property]` when computed."""

    kind: ClassVar[str] = "MemberExpression"

    object: Node | None = None
    property: Node | None = None
    computed: bool = False


@dataclass
class BinaryExpression(Node):
    kind: ClassVar[str] = "BinaryExpression"

    operator: str = ""
    left: Node | None = None
    right: Node | None = None


@dataclass
class UnaryExpression(Node):
    kind: ClassVar[str] = "UnaryExpression"

    operator: str = ""
    argument: Node | None = None


@dataclass
class GenericNode(Node):
    """Any construct the extractor has no dedicated shape for.

    Attributes:
        grammar_type: The tree-sitter node type (e.g. "if_statement")
        children: Converted named children, in source order
    """

    kind: ClassVar[str] = "Generic"

    grammar_type: str = ""
    children: list[Node] = field(default_factory=list)


@dataclass
class Program(Node):
    kind: ClassVar[str] = "Program"

    body: list[Node] = field(default_factory=list)
